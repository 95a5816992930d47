"""Adapters implementing the core ports."""

from samplemetric.adapters.clock import SystemClock
from samplemetric.adapters.host import SocketHostResolver, StaticHostResolver
from samplemetric.adapters.storage import InMemoryMetricSink, SQLiteMetricSink

__all__ = [
    "InMemoryMetricSink",
    "SQLiteMetricSink",
    "SocketHostResolver",
    "StaticHostResolver",
    "SystemClock",
]

"""Document sinks implementing MetricSinkPort."""

from samplemetric.adapters.storage.async_utils import (
    _collect_async_iterable as collect_async_iterable,
)
from samplemetric.adapters.storage.async_utils import (
    _run_sync as run_sync,
)
from samplemetric.adapters.storage.in_memory import InMemoryMetricSink
from samplemetric.adapters.storage.sqlite import SQLiteMetricSink

__all__ = [
    "InMemoryMetricSink",
    "SQLiteMetricSink",
    "collect_async_iterable",
    "run_sync",
]

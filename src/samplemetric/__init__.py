"""samplemetric: load-test samples to filtered metric documents.

Example:
    ```python
    from samplemetric import (
        BuilderConfig,
        InMemoryMetricSink,
        SampleListener,
        SocketHostResolver,
        SystemClock,
    )

    config = BuilderConfig.from_parameters(params, test_start_time=start_ms)
    listener = SampleListener(
        config, InMemoryMetricSink(), SocketHostResolver(), SystemClock(), params
    )
    ```
"""

from samplemetric.adapters import (
    InMemoryMetricSink,
    SocketHostResolver,
    SQLiteMetricSink,
    StaticHostResolver,
    SystemClock,
)
from samplemetric.core import (
    AssertionOutcome,
    BuilderConfig,
    ConfigurationError,
    FieldFilter,
    HostResolutionError,
    MetricBuilder,
    MetricDocument,
    SampleEvent,
    SampleMetricError,
    TestMode,
)
from samplemetric.core.encoding import encode_document, encode_documents
from samplemetric.core.ports import ClockPort, HostResolverPort, MetricSinkPort
from samplemetric.listener import SampleListener

__all__ = [
    "AssertionOutcome",
    "BuilderConfig",
    "ClockPort",
    "ConfigurationError",
    "FieldFilter",
    "HostResolutionError",
    "HostResolverPort",
    "InMemoryMetricSink",
    "MetricBuilder",
    "MetricDocument",
    "MetricSinkPort",
    "SQLiteMetricSink",
    "SampleEvent",
    "SampleListener",
    "SampleMetricError",
    "SocketHostResolver",
    "StaticHostResolver",
    "SystemClock",
    "TestMode",
    "encode_document",
    "encode_documents",
]

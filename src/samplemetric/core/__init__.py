"""Core domain: models, ports and the metric builder."""

from samplemetric.core.builder import MetricBuilder
from samplemetric.core.config import BuilderConfig
from samplemetric.core.exceptions import (
    ConfigurationError,
    HostResolutionError,
    SampleMetricError,
)
from samplemetric.core.models import (
    AssertionOutcome,
    FieldFilter,
    MetricDocument,
    SampleEvent,
    TestMode,
)

__all__ = [
    "AssertionOutcome",
    "BuilderConfig",
    "ConfigurationError",
    "FieldFilter",
    "HostResolutionError",
    "MetricBuilder",
    "MetricDocument",
    "SampleEvent",
    "SampleMetricError",
    "TestMode",
]

"""Exceptions raised by samplemetric."""


class SampleMetricError(Exception):
    """Base class for all samplemetric errors."""


class HostResolutionError(SampleMetricError):
    """The injector host name could not be resolved.

    Raised out of MetricBuilder.build; the current document is abandoned.
    """


class ConfigurationError(SampleMetricError, ValueError):
    """A configuration value is missing or malformed."""

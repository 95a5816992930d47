"""Port interfaces for the builder's external collaborators.

The core depends only on these protocols. Adapters in
``samplemetric.adapters`` provide the production implementations.
"""

from collections.abc import AsyncIterable
from typing import Protocol, runtime_checkable

from samplemetric.core.models import MetricDocument


@runtime_checkable
class HostResolverPort(Protocol):
    """Port for looking up the injector host name."""

    def resolve(self) -> str:
        """Return the local host name.

        Raises:
            HostResolutionError: If the name cannot be resolved.
        """
        ...


@runtime_checkable
class ClockPort(Protocol):
    """Port for reading the current wall-clock time."""

    def now_millis(self) -> int:
        """Return the current time as a Unix timestamp in milliseconds."""
        ...


@runtime_checkable
class MetricSinkPort(Protocol):
    """Port for publishing finished documents.

    Adapters implementing this protocol receive each document once.
    Examples: InMemoryMetricSink, SQLiteMetricSink.
    """

    async def write(self, document: MetricDocument) -> None:
        """Publish a document."""
        ...

    def read(self) -> AsyncIterable[MetricDocument]:
        """Read published documents in publication order."""
        ...

"""In-memory document sink."""

from collections.abc import AsyncIterable

from samplemetric.core.models import MetricDocument


class InMemoryMetricSink:
    """In-memory implementation of MetricSinkPort.

    Keeps published documents in a list. Suitable for testing and for
    hosts that hand documents to another component in-process.
    """

    def __init__(self) -> None:
        self._documents: list[MetricDocument] = []

    async def write(self, document: MetricDocument) -> None:
        """Publish a document."""
        self._documents.append(document)

    async def read(self) -> AsyncIterable[MetricDocument]:
        """Read documents in publication order."""
        for document in list(self._documents):
            yield document

    async def count(self) -> int:
        """Return the number of published documents."""
        return len(self._documents)

    async def clear(self) -> None:
        """Drop all published documents."""
        self._documents.clear()

"""Per-sample orchestration: build a document and hand it to a sink."""

import logging
from collections.abc import Iterable, Mapping

from samplemetric.adapters.storage import run_sync
from samplemetric.core.builder import MetricBuilder
from samplemetric.core.config import BuilderConfig
from samplemetric.core.models import MetricDocument, SampleEvent
from samplemetric.core.ports import ClockPort, HostResolverPort, MetricSinkPort


class SampleListener:
    """Turns each completed sample into a document and publishes it.

    A fresh MetricBuilder is created for every sample, so no state is carried
    from one sample to the next. Publishing happens once per document with no
    retries or batching; sink errors propagate to the caller.

    Example:
        ```python
        listener = SampleListener(
            config=BuilderConfig.from_parameters(params, test_start_time=start),
            sink=InMemoryMetricSink(),
            host_resolver=SocketHostResolver(),
            clock=SystemClock(),
            parameters=params,
        )
        await listener.handle_sample(event)
        ```
    """

    def __init__(
        self,
        config: BuilderConfig,
        sink: MetricSinkPort,
        host_resolver: HostResolverPort,
        clock: ClockPort,
        parameters: Mapping[str, str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._sink = sink
        self._host_resolver = host_resolver
        self._clock = clock
        self._parameters = dict(parameters or {})
        self._logger = logger or logging.getLogger(__name__)

    def build(self, event: SampleEvent) -> MetricDocument:
        """Build the document for one sample without publishing it."""
        builder = MetricBuilder(self._config, self._clock, self._logger)
        return builder.build(event, self._host_resolver, self._parameters.items())

    async def handle_sample(self, event: SampleEvent) -> MetricDocument:
        """Build and publish the document for one sample.

        Raises:
            HostResolutionError: If the injector host name cannot be resolved.
        """
        document = self.build(event)
        await self._sink.write(document)
        self._logger.debug(
            "Published document for sample %r (%d keys)",
            event.sample_label,
            len(document),
        )
        return document

    async def handle_samples(self, events: Iterable[SampleEvent]) -> int:
        """Build and publish documents for ``events`` in order.

        Returns:
            Number of documents published.
        """
        published = 0
        for event in events:
            await self.handle_sample(event)
            published += 1
        return published

    def handle_samples_sync(self, events: Iterable[SampleEvent]) -> int:
        """Synchronous variant of handle_samples for threaded hosts."""
        return run_sync(self.handle_samples(events))

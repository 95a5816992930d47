"""Builds one MetricDocument from one SampleEvent."""

import logging
from collections.abc import Iterable
from datetime import date

from samplemetric.core.config import BuilderConfig
from samplemetric.core.fields import iter_custom_fields
from samplemetric.core.headers import parse_header_block
from samplemetric.core.models import (
    AssertionRecord,
    DocumentValue,
    MetricDocument,
    SampleEvent,
)
from samplemetric.core.ports import ClockPort, HostResolverPort
from samplemetric.core.timestamps import (
    COMPARISON_DATE,
    Elapsed,
    current_date,
    format_millis,
)


class MetricBuilder:
    """Transforms a completed sample into a filtered, enriched document.

    A builder holds the configuration snapshot for exactly one event. Create
    a new builder for every sample; instances are not meant to be reused or
    shared between threads.

    Example:
        ```python
        builder = MetricBuilder(config, SystemClock())
        document = builder.build(event, SocketHostResolver(), params.items())
        ```
    """

    def __init__(
        self,
        config: BuilderConfig,
        clock: ClockPort,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            config: Immutable builder configuration.
            clock: Source of the current time for elapsed-time fields.
            logger: Logger for recoverable problems. Defaults to this
                module's logger.
        """
        self._config = config
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)
        self._document = MetricDocument()

    def build(
        self,
        event: SampleEvent,
        host_resolver: HostResolverPort,
        parameters: Iterable[tuple[str, str]] = (),
    ) -> MetricDocument:
        """Build the document for ``event``.

        Args:
            event: The completed sample.
            host_resolver: Looks up the injector host name.
            parameters: Listener parameters as (name, value) pairs; those
                outside the reserved prefix become custom fields.

        Returns:
            The finished document.

        Raises:
            HostResolutionError: If the injector host name cannot be resolved.
        """
        # Every call starts a new document; earlier results stay untouched.
        self._document = MetricDocument()
        self._add_sample_fields(event, host_resolver)
        if self._config.test_mode.includes_details(event.success):
            self._add_details(event)
        self._add_assertions(event)
        self._add_elapsed_time()
        self._add_custom_fields(parameters)
        self._add_parsed_headers(event)
        return self._document

    def _insert(self, key: str, value: DocumentValue) -> None:
        """Insert ``key`` if the field filter allows it."""
        # @tra: Core.MetricBuilder.FilteredInsert
        if self._config.fields.allows(key):
            self._document.set(key, value)

    def _format(self, millis: int) -> str:
        return format_millis(millis, self._config.timestamp_pattern, self._config.tz)

    def _add_sample_fields(
        self, event: SampleEvent, host_resolver: HostResolverPort
    ) -> None:
        self._insert("AllThreads", event.all_threads)
        self._insert("BodySize", event.body_size)
        self._insert("Bytes", event.bytes)
        self._insert("SentBytes", event.sent_bytes)
        self._insert("ConnectTime", event.connect_time)
        self._insert("ContentType", event.content_type)
        self._insert("DataType", event.data_type)
        self._insert("ErrorCount", event.error_count)
        self._insert("GrpThreads", event.group_threads)
        self._insert("IdleTime", event.idle_time)
        self._insert("Latency", event.latency)
        self._insert("ResponseTime", event.elapsed)
        self._insert("SampleCount", event.sample_count)
        self._insert("SampleLabel", event.sample_label)
        self._insert("ThreadName", event.thread_name)
        self._insert("URL", event.url)
        self._insert("ResponseCode", event.response_code)
        self._insert("TestStartTime", self._format(self._config.test_start_time))
        self._insert("SampleStartTime", self._format(event.start_time))
        self._insert("SampleEndTime", self._format(event.end_time))
        self._insert("Timestamp", self._format(event.timestamp))
        self._insert("InjectorHostname", host_resolver.resolve())

    def _add_details(self, event: SampleEvent) -> None:
        self._insert("RequestHeaders", event.request_headers)
        self._insert("RequestBody", event.request_body)
        self._insert("ResponseHeaders", event.response_headers)
        self._insert("ResponseBody", event.response_body)
        self._insert("ResponseMessage", event.response_message)

    def _add_assertions(self, event: SampleEvent) -> None:
        if not event.assertions:
            return
        # @tra: Core.MetricBuilder.Assertions
        results: list[AssertionRecord] = []
        failure_message = ""
        any_failed = False
        for outcome in event.assertions:
            failed = outcome.failure or outcome.error
            any_failed = any_failed or failed
            results.append(
                {
                    "failure": failed,
                    "failureMessage": outcome.failure_message,
                    "name": outcome.name,
                }
            )
            failure_message += outcome.failure_message + "\n"
        self._insert("AssertionResults", results)
        self._insert("FailureMessage", failure_message)
        self._insert("Success", not any_failed)

    def _add_elapsed_time(self) -> None:
        """Add ElapsedTime, plus BuildNumber/ElapsedTimeComparison under CI.

        A pattern that fails to render drops only the affected key.
        """
        config = self._config
        now = self._clock.now_millis()
        elapsed = Elapsed.between(config.test_start_time, now)

        if config.build_comparison:
            self._insert("BuildNumber", config.build_number)
            self._insert_rendered(
                "ElapsedTimeComparison", elapsed, COMPARISON_DATE
            )

        # Anchored on the calendar month and day of the clock, not minute-of-hour.
        self._insert_rendered("ElapsedTime", elapsed, current_date(now, config.tz))

    def _insert_rendered(self, key: str, elapsed: Elapsed, anchor: date) -> None:
        try:
            rendered = elapsed.render(
                anchor, self._config.timestamp_pattern, self._config.tz
            )
        except ValueError:
            self._logger.exception("Unexpected error occurred computing %s", key)
            return
        self._insert(key, rendered)

    def _add_custom_fields(self, parameters: Iterable[tuple[str, str]]) -> None:
        for name, value in iter_custom_fields(
            parameters, self._config.reserved_prefix, self._logger
        ):
            self._insert(name, value)

    def _add_parsed_headers(self, event: SampleEvent) -> None:
        """Copy individual header lines into the document, bypassing the filter."""
        blocks: list[str] = []
        if self._config.parse_request_headers:
            blocks.append(event.request_headers)
        if self._config.parse_response_headers:
            blocks.append(event.response_headers)
        for block in blocks:
            for name, value in parse_header_block(block):
                self._document.set(name, value)

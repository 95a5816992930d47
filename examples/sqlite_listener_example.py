"""Example: publish load-test samples to a SQLite sink.

Run with:
    python -m examples.sqlite_listener_example

Listener parameters:
    kafka.test.mode              - debug | error | info | other
    kafka.timestamp              - strftime pattern for all timestamps
    kafka.fields                 - comma-separated allow-list (empty = all)
    kafka.parse.all.req.headers  - true to copy request headers into keys
    any other name               - added to every document as a custom field

Set BUILD_NUMBER in the environment to get ElapsedTimeComparison fields.
"""

import asyncio
import logging
import time

from samplemetric import (
    AssertionOutcome,
    BuilderConfig,
    SampleEvent,
    SampleListener,
    SocketHostResolver,
    SQLiteMetricSink,
    SystemClock,
    encode_documents,
)

PARAMETERS = {
    "kafka.test.mode": "info",
    "kafka.timestamp": "%Y-%m-%dT%H:%M:%S.%f%z",
    "kafka.parse.all.req.headers": "true",
    "environment": "staging",
    "retries": "3",
}


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    start = int(time.time() * 1000)
    sink = SQLiteMetricSink("documents.db")
    listener = SampleListener(
        config=BuilderConfig.from_parameters(PARAMETERS, test_start_time=start),
        sink=sink,
        host_resolver=SocketHostResolver(),
        clock=SystemClock(),
        parameters=PARAMETERS,
    )

    await listener.handle_samples(
        [
            SampleEvent(
                sample_label="GET /",
                start_time=start,
                end_time=start + 35,
                timestamp=start,
                elapsed=35,
                response_code="200",
                request_headers="Accept: */*\nX-es-backend-Scenario: smoke",
            ),
            SampleEvent(
                sample_label="POST /cart",
                success=False,
                start_time=start + 40,
                end_time=start + 140,
                timestamp=start + 40,
                elapsed=100,
                response_code="500",
                response_message="Internal Server Error",
                assertions=(
                    AssertionOutcome(
                        name="status 2xx", failure=True, failure_message="got 500"
                    ),
                ),
            ),
        ]
    )

    print(encode_documents([d async for d in sink.read()]), end="")


if __name__ == "__main__":
    asyncio.run(main())

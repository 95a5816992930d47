"""Shared test fixtures for all test modules."""

from dataclasses import replace
from datetime import timezone
from pathlib import Path

import pytest

from samplemetric.core.config import BuilderConfig
from samplemetric.core.models import AssertionOutcome, SampleEvent, TestMode
from tests.fakes import PLAIN_PATTERN, TEST_START, FixedClock, FixedHostResolver


@pytest.fixture
def clock() -> FixedClock:
    """Clock sitting 2 minutes 5 seconds after TEST_START."""
    return FixedClock(TEST_START + 125_000)


@pytest.fixture
def host_resolver() -> FixedHostResolver:
    return FixedHostResolver()


@pytest.fixture
def config() -> BuilderConfig:
    """Builder config with a plain pattern, info mode, no CI build number."""
    return BuilderConfig(
        timestamp_pattern=PLAIN_PATTERN,
        test_mode=TestMode.INFO,
        test_start_time=TEST_START,
        tz=timezone.utc,
    )


@pytest.fixture
def make_config(config: BuilderConfig):
    """Factory fixture deriving configs from the default one.

    Usage:
        def test_something(make_config):
            cfg = make_config(test_mode=TestMode.DEBUG, build_number=7)
    """

    def _make(**changes: object) -> BuilderConfig:
        return replace(config, **changes)

    return _make


@pytest.fixture
def sample_event() -> SampleEvent:
    """A successful HTTP sample with headers, bodies and two assertions."""
    return SampleEvent(
        sample_label="GET /orders",
        success=True,
        all_threads=10,
        group_threads=5,
        body_size=512,
        bytes=640,
        sent_bytes=128,
        connect_time=12,
        content_type="application/json",
        data_type="text",
        error_count=0,
        idle_time=1,
        latency=40,
        elapsed=55,
        sample_count=1,
        thread_name="Orders 1-1",
        url="http://shop.test/orders",
        response_code="200",
        start_time=TEST_START + 60_000,
        end_time=TEST_START + 60_055,
        timestamp=TEST_START + 60_000,
        request_headers="Accept: application/json\nX-es-backend-Tag: value1",
        response_headers="Content-Type: application/json\nServer: nginx",
        request_body="GET http://shop.test/orders",
        response_body='{"orders": []}',
        response_message="OK",
        assertions=(
            AssertionOutcome(name="status is 200"),
            AssertionOutcome(name="has orders", failure_message=""),
        ),
    )


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    """Provide a temporary database path for SQLite sink tests."""
    return str(tmp_path / "documents.db")

"""Step definitions for detail mode scenarios."""

from dataclasses import dataclass, field, replace

import pytest
from pytest_bdd import given, parsers, then, when

from samplemetric.core.builder import MetricBuilder
from samplemetric.core.config import BuilderConfig
from samplemetric.core.models import AssertionOutcome, MetricDocument, SampleEvent, TestMode
from tests.fakes import PLAIN_PATTERN, TEST_START, FixedClock, FixedHostResolver

DETAIL_KEYS = (
    "RequestHeaders",
    "RequestBody",
    "ResponseHeaders",
    "ResponseBody",
    "ResponseMessage",
)


@dataclass
class ModeScenarioContext:
    """Mutable state shared between the steps of one scenario."""

    event: SampleEvent = field(default_factory=lambda: SampleEvent(sample_label=""))
    config: BuilderConfig = field(
        default_factory=lambda: BuilderConfig(
            timestamp_pattern=PLAIN_PATTERN, test_start_time=TEST_START
        )
    )
    document: MetricDocument | None = None


@pytest.fixture
def ctx() -> ModeScenarioContext:
    """Fresh scenario context for each test."""
    return ModeScenarioContext()


@given(parsers.parse('a sample labelled "{label}"'))
def step_sample(ctx: ModeScenarioContext, label: str) -> None:
    ctx.event = SampleEvent(
        sample_label=label,
        request_headers="Accept: */*",
        response_headers="Server: nginx",
        request_body="GET /orders",
        response_body="[]",
        response_message="OK",
    )


@given(parsers.parse('a builder in "{mode}" mode'))
def step_mode(ctx: ModeScenarioContext, mode: str) -> None:
    ctx.config = replace(ctx.config, test_mode=TestMode.parse(mode))


@given(parsers.re(r"the sample (?P<outcome>succeeded|failed)"))
def step_outcome(ctx: ModeScenarioContext, outcome: str) -> None:
    ctx.event = replace(ctx.event, success=outcome == "succeeded")


@given(parsers.parse('the sample has a failing assertion "{name}"'))
def step_failing_assertion(ctx: ModeScenarioContext, name: str) -> None:
    ctx.event = replace(
        ctx.event,
        success=False,
        assertions=(AssertionOutcome(name=name, failure=True, failure_message="no id"),),
    )


@when("the document is built")
def step_build(ctx: ModeScenarioContext) -> None:
    builder = MetricBuilder(ctx.config, FixedClock(TEST_START + 1_000))
    ctx.document = builder.build(ctx.event, FixedHostResolver())


@then(parsers.re(r"detail fields are (?P<presence>present|absent)"))
def step_details(ctx: ModeScenarioContext, presence: str) -> None:
    assert ctx.document is not None
    present = [key for key in DETAIL_KEYS if key in ctx.document]
    if presence == "present":
        assert present == list(DETAIL_KEYS)
    else:
        assert present == []


@then("the document reports Success as false")
def step_success_false(ctx: ModeScenarioContext) -> None:
    assert ctx.document is not None
    assert ctx.document["Success"] is False

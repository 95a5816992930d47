"""Builder configuration and parsing of listener parameters."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo

from samplemetric.core.exceptions import ConfigurationError
from samplemetric.core.models import FieldFilter, TestMode

logger = logging.getLogger(__name__)

# Listener parameters starting with this prefix configure the listener itself
# and are never copied into documents as custom fields.
SERVICE_NAME_PREFIX = "kafka."

PARAM_TEST_MODE = "kafka.test.mode"
PARAM_TIMESTAMP = "kafka.timestamp"
PARAM_FIELDS = "kafka.fields"
PARAM_PARSE_REQ_HEADERS = "kafka.parse.all.req.headers"
PARAM_PARSE_RES_HEADERS = "kafka.parse.all.res.headers"
BUILD_NUMBER_ENV = "BUILD_NUMBER"

DEFAULT_TIMESTAMP_PATTERN = "%Y-%m-%dT%H:%M:%S.%f%z"
DEFAULT_TEST_MODE = TestMode.INFO

_TRUE_VALUES = {"true"}
_FALSE_VALUES = {"false", ""}

_PATTERN_CHECK_MOMENT = datetime(2017, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class BuilderConfig:
    """Immutable snapshot of everything a MetricBuilder needs.

    Attributes:
        timestamp_pattern: strftime pattern used for every rendered timestamp.
        test_mode: Controls inclusion of request/response detail fields.
        build_number: CI build number, 0 when not running under CI.
        test_start_time: Start of the test run, Unix timestamp in milliseconds.
        parse_request_headers: Copy each request header into its own key.
        parse_response_headers: Copy each response header into its own key.
        fields: Allow-list applied to every filtered insert.
        tz: Timezone timestamps are rendered in.
        reserved_prefix: Parameter names with this prefix are not custom fields.
    """

    timestamp_pattern: str = DEFAULT_TIMESTAMP_PATTERN
    test_mode: TestMode = DEFAULT_TEST_MODE
    build_number: int = 0
    test_start_time: int = 0
    parse_request_headers: bool = False
    parse_response_headers: bool = False
    fields: FieldFilter = field(default_factory=FieldFilter)
    tz: tzinfo = timezone.utc
    reserved_prefix: str = SERVICE_NAME_PREFIX

    def __post_init__(self) -> None:
        if not self.timestamp_pattern.strip():
            raise ConfigurationError("timestamp pattern must not be blank")
        if self.build_number < 0:
            raise ConfigurationError(
                f"build number must be >= 0, got {self.build_number}"
            )
        object.__setattr__(self, "timestamp_pattern", self.timestamp_pattern.strip())
        try:
            _PATTERN_CHECK_MOMENT.astimezone(self.tz).strftime(self.timestamp_pattern)
        except ValueError as exc:
            raise ConfigurationError(
                f"timestamp pattern {self.timestamp_pattern!r} cannot be rendered: {exc}"
            ) from exc

    @property
    def build_comparison(self) -> bool:
        """True when documents carry build-comparison elapsed times."""
        return self.build_number != 0

    @classmethod
    def from_parameters(
        cls,
        parameters: Mapping[str, str],
        test_start_time: int,
        environ: Mapping[str, str] | None = None,
    ) -> "BuilderConfig":
        """Create a config from listener parameters and the environment.

        Args:
            parameters: Listener parameters as configured in the host.
            test_start_time: Start of the test run in epoch milliseconds.
            environ: Environment to read BUILD_NUMBER from (default os.environ).

        Returns:
            A validated BuilderConfig.

        Raises:
            ConfigurationError: If the mode or a boolean flag is malformed.
        """
        env = os.environ if environ is None else environ
        mode_text = parameters.get(PARAM_TEST_MODE, "")
        return cls(
            timestamp_pattern=parameters.get(PARAM_TIMESTAMP, "").strip()
            or DEFAULT_TIMESTAMP_PATTERN,
            test_mode=TestMode.parse(mode_text) if mode_text.strip() else DEFAULT_TEST_MODE,
            build_number=_parse_build_number(env.get(BUILD_NUMBER_ENV)),
            test_start_time=test_start_time,
            parse_request_headers=_parse_flag(parameters, PARAM_PARSE_REQ_HEADERS),
            parse_response_headers=_parse_flag(parameters, PARAM_PARSE_RES_HEADERS),
            fields=FieldFilter.parse(parameters.get(PARAM_FIELDS, "")),
        )


def _parse_flag(parameters: Mapping[str, str], name: str) -> bool:
    raw = parameters.get(name, "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be 'true' or 'false', got {raw!r}")


def _parse_build_number(raw: str | None) -> int:
    """Parse the CI build number, falling back to 0 (no CI context)."""
    if raw is None or not raw.strip():
        return 0
    try:
        value = int(raw.strip())
    except ValueError:
        logger.debug("Ignoring non-numeric %s=%r", BUILD_NUMBER_ENV, raw)
        return 0
    if value < 0:
        logger.debug("Ignoring negative %s=%r", BUILD_NUMBER_ENV, raw)
        return 0
    return value

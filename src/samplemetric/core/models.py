"""Core domain models for sample events and metric documents."""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum

from samplemetric.core.exceptions import ConfigurationError

AssertionRecord = dict[str, str | bool]
DocumentValue = str | int | bool | list[AssertionRecord]


@dataclass(frozen=True)
class AssertionOutcome:
    """Result of a single assertion attached to a sample.

    Attributes:
        name: Assertion name as shown in the test plan.
        failure: True if the assertion did not hold.
        error: True if the assertion could not be evaluated.
        failure_message: Message explaining the failure, may be empty.
    """

    name: str
    failure: bool = False
    error: bool = False
    failure_message: str = ""


@dataclass(frozen=True)
class SampleEvent:
    """One completed sample, as handed over by the load-test host.

    All times are Unix timestamps in milliseconds. Header blocks are the raw
    newline-delimited "Key: Value" text the sampler recorded.
    """

    sample_label: str
    success: bool = True
    all_threads: int = 0
    group_threads: int = 0
    body_size: int = 0
    bytes: int = 0
    sent_bytes: int = 0
    connect_time: int = 0
    content_type: str = ""
    data_type: str = ""
    error_count: int = 0
    idle_time: int = 0
    latency: int = 0
    elapsed: int = 0
    sample_count: int = 1
    thread_name: str = ""
    url: str = ""
    response_code: str = ""
    start_time: int = 0
    end_time: int = 0
    timestamp: int = 0
    request_headers: str = ""
    response_headers: str = ""
    request_body: str = ""
    response_body: str = ""
    response_message: str = ""
    assertions: tuple[AssertionOutcome, ...] = field(default_factory=tuple)


def _is_assertion_records(value: object) -> bool:
    if not isinstance(value, list):
        return False
    return all(
        isinstance(item, dict)
        and all(isinstance(k, str) and isinstance(v, (str, bool)) for k, v in item.items())
        for item in value
    )


class MetricDocument(Mapping[str, DocumentValue]):
    """Flat key-value document built from one sample.

    Values are restricted to str, int, bool or a list of assertion records.
    The builder is the only writer; publishers treat it as a read-only mapping.
    """

    def __init__(self) -> None:
        self._values: dict[str, DocumentValue] = {}

    @classmethod
    def from_mapping(cls, values: Mapping[str, DocumentValue]) -> "MetricDocument":
        """Rebuild a document, e.g. from decoded JSON."""
        document = cls()
        for key, value in values.items():
            document.set(key, value)
        return document

    def set(self, key: str, value: DocumentValue) -> None:
        """Set ``key`` to ``value``, replacing any previous value.

        Raises:
            TypeError: If the value is not a supported document value.
        """
        if not isinstance(key, str):
            raise TypeError(f"document keys must be str, got {type(key).__name__}")
        if not isinstance(value, (str, int)) and not _is_assertion_records(value):
            raise TypeError(
                f"unsupported value for {key!r}: {type(value).__name__}"
            )
        self._values[key] = value

    def as_dict(self) -> dict[str, DocumentValue]:
        """Return a plain dict copy suitable for serialization."""
        return {
            key: [dict(item) for item in value] if isinstance(value, list) else value
            for key, value in self._values.items()
        }

    def __getitem__(self, key: str) -> DocumentValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"MetricDocument({self._values!r})"


@dataclass(frozen=True)
class FieldFilter:
    """Case-insensitive allow-list of document keys.

    An empty filter lets every key through.
    """

    names: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", frozenset(n.lower() for n in self.names))

    @classmethod
    def of(cls, names: Iterable[str]) -> "FieldFilter":
        return cls(frozenset(names))

    @classmethod
    def parse(cls, text: str) -> "FieldFilter":
        """Build a filter from a comma-separated list such as ``"Latency, URL"``."""
        return cls(frozenset(part.strip() for part in text.split(",") if part.strip()))

    def allows(self, key: str) -> bool:
        # @tra: Core.FieldFilter.Allows
        return not self.names or key.lower() in self.names


class TestMode(Enum):
    """How much request/response detail goes into each document."""

    __test__ = False

    DEBUG = "debug"
    ERROR = "error"
    INFO = "info"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "TestMode":
        """Parse a mode name, ignoring case and surrounding whitespace.

        Raises:
            ConfigurationError: If the name is not a known mode.
        """
        normalized = value.strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        valid = ", ".join(m.value for m in cls)
        raise ConfigurationError(f"unknown test mode {value!r} (expected one of: {valid})")

    def includes_details(self, success: bool) -> bool:
        """Return True if a sample with the given outcome gets detail fields."""
        # @tra: Core.TestMode.DetailTable
        match self:
            case TestMode.DEBUG | TestMode.ERROR:
                return True
            case TestMode.INFO:
                return not success
            case TestMode.OTHER:
                return False

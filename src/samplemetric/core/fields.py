"""Custom field selection and type coercion."""

import logging
from collections.abc import Iterable, Iterator

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def coerce_value(raw: str, logger: logging.Logger | None = None) -> str | int:
    """Return ``raw`` trimmed, as an int when it parses as a 64-bit integer.

    Uses Python's base-10 ``int()`` rules, so ``"007"`` becomes 7 and
    ``"0x1F"`` stays a string.
    """
    value = raw.strip()
    try:
        number = int(value, 10)
    except ValueError:
        if logger is not None:
            logger.debug("Cannot convert custom field to number: %r", value)
        return value
    if not _INT64_MIN <= number <= _INT64_MAX:
        if logger is not None:
            logger.debug("Custom field out of 64-bit range, keeping text: %r", value)
        return value
    return number


def iter_custom_fields(
    parameters: Iterable[tuple[str, str]],
    reserved_prefix: str,
    logger: logging.Logger | None = None,
) -> Iterator[tuple[str, str | int]]:
    """Yield ``(name, coerced value)`` for user-defined listener parameters.

    Parameters under ``reserved_prefix`` and blank values are skipped.
    """
    for name, raw in parameters:
        if name.startswith(reserved_prefix) or not raw.strip():
            continue
        yield name, coerce_value(raw, logger)

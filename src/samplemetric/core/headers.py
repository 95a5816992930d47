"""Splitting raw header blocks into individual document keys."""

from collections.abc import Iterator

# Removed from header names so "X-es-backend-Tag" lands as "X-backend-Tag".
HEADER_MARKER = "es-"


def parse_header_block(block: str) -> Iterator[tuple[str, str]]:
    """Yield ``(name, value)`` for every "Name: Value" line in ``block``.

    Lines are split on the first colon only. Lines without a colon are
    skipped. Every occurrence of ``"es-"`` is removed from the name, then
    name and value are stripped.
    """
    for line in block.split("\n"):
        name, sep, value = line.partition(":")
        if not sep:
            continue
        yield name.replace(HEADER_MARKER, "").strip(), value.strip()

"""NDJSON encoder for metric documents."""

import json
from collections.abc import Iterable

from samplemetric.core.models import MetricDocument


def encode_document(document: MetricDocument) -> str:
    """Encode a single document as one compact JSON object (no newline)."""
    return json.dumps(document.as_dict(), separators=(",", ":"), sort_keys=True)


def encode_documents(documents: Iterable[MetricDocument]) -> str:
    """Encode documents to newline-delimited JSON.

    Args:
        documents: An iterable of MetricDocument objects.

    Returns:
        NDJSON string with one JSON object per line.
        Empty string if no documents.
    """
    lines = [encode_document(document) for document in documents]

    if not lines:
        return ""

    return "\n".join(lines) + "\n"

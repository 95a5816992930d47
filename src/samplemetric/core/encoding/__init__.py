"""Encoders for metric documents."""

from samplemetric.core.encoding.ndjson import encode_document, encode_documents

__all__ = ["encode_document", "encode_documents"]

"""Required-field validation shared by the shaping client and the API."""

from qacorpus.validation.documents import (
    INVALID_BATCH_MESSAGE,
    Schema,
    missing_fields,
    parse_batch,
    parse_document,
    required_fields,
    validate_batch,
    validate_document,
)

__all__ = [
    "INVALID_BATCH_MESSAGE",
    "Schema",
    "missing_fields",
    "parse_batch",
    "parse_document",
    "required_fields",
    "validate_batch",
    "validate_document",
]

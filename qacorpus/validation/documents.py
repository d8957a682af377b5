"""Required-field validation for corpus documents.

The same rules run in the shaping client before a document is queued and in
the API before anything is written. The API never relies on the client having
checked: it re-derives the required set from each document's ``type``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from qacorpus.core.exceptions import DocumentValidationError
from qacorpus.models.documents import DocumentType, QAPairDocument, ShapedDocument, promptme_adapter
from qacorpus.utils.validators import is_blank

logger = logging.getLogger(__name__)

INVALID_BATCH_MESSAGE = "Missing or invalid documents array"


class Schema(str, Enum):
    """Which ingestion endpoint a document is headed for."""

    PROMPTME = "promptme"
    QA = "qa"


TAGGED_FIELDS: Tuple[str, ...] = ("type", "context", "category", "prompt")
TYPE_SPECIFIC_FIELDS: Dict[str, Tuple[str, ...]] = {
    DocumentType.REVERSE_PROMPT.value: ("name", "action", "next-prompt"),
    DocumentType.FAQ.value: ("response",),
}
QA_FIELDS: Tuple[str, ...] = ("prompt", "response")


def _declared_type(document: Mapping[str, Any]) -> Optional[str]:
    value = document.get("type")
    return value if isinstance(value, str) else None


def required_fields(document: Mapping[str, Any], schema: Schema = Schema.PROMPTME) -> Tuple[str, ...]:
    """Return the required fields of ``document`` in the order they are checked."""

    if schema is Schema.QA:
        return QA_FIELDS
    return TAGGED_FIELDS + TYPE_SPECIFIC_FIELDS.get(_declared_type(document) or "", ())


def missing_fields(document: Mapping[str, Any], schema: Schema = Schema.PROMPTME) -> List[str]:
    return [name for name in required_fields(document, schema) if is_blank(document.get(name))]


def _label(document: Mapping[str, Any], schema: Schema) -> str:
    if schema is Schema.QA:
        return "qa"
    return _declared_type(document) or "untyped"


def validate_document(
    document: Any,
    schema: Schema = Schema.PROMPTME,
    *,
    index: Optional[int] = None,
) -> None:
    """Raise `DocumentValidationError` unless ``document`` has every required field.

    Without ``index`` the message names the first missing field. With an
    ``index`` (1-based batch position) it names the document and every field
    it lacks.
    """

    prefix = f"Document {index}" if index is not None else "Document"

    if not isinstance(document, Mapping):
        raise DocumentValidationError(f"{prefix} must be a JSON object", index=index)

    missing = missing_fields(document, schema)

    if schema is Schema.PROMPTME and "type" not in missing:
        declared = _declared_type(document)
        if declared not in TYPE_SPECIFIC_FIELDS:
            raise DocumentValidationError(
                f"{prefix} has unsupported type {document.get('type')!r}; "
                f"expected one of: {', '.join(TYPE_SPECIFIC_FIELDS)}",
                index=index,
                fields=["type"],
            )

    if not missing:
        return

    if index is None:
        message = f"Missing required field: {missing[0]}"
    else:
        noun = "field" if len(missing) == 1 else "fields"
        message = f"{prefix} ({_label(document, schema)}) missing required {noun}: {', '.join(missing)}"
    raise DocumentValidationError(message, index=index, fields=missing)


def validate_batch(documents: Any, schema: Schema = Schema.PROMPTME) -> List[Mapping[str, Any]]:
    """Validate every document of a batch; the first failure rejects all of them."""

    if not isinstance(documents, list) or not documents:
        raise DocumentValidationError(INVALID_BATCH_MESSAGE)

    for position, document in enumerate(documents, start=1):
        validate_document(document, schema, index=position)
    return documents


def parse_document(document: Mapping[str, Any], schema: Schema, *, index: Optional[int] = None) -> ShapedDocument:
    """Turn a validated mapping into its typed model, normalizing optional fields."""

    try:
        if schema is Schema.QA:
            return QAPairDocument.model_validate(document)
        return promptme_adapter.validate_python(document)
    except ValidationError as exc:
        fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
        prefix = f"Document {index}" if index is not None else "Document"
        logger.debug("Rejected malformed document %s: %s", index, exc)
        raise DocumentValidationError(
            f"{prefix} has malformed fields: {', '.join(fields)}",
            index=index,
            fields=fields,
        ) from exc


def parse_batch(documents: Any, schema: Schema = Schema.PROMPTME) -> List[ShapedDocument]:
    """Validate and parse a batch submitted to an ingestion endpoint."""

    validated: Sequence[Mapping[str, Any]] = validate_batch(documents, schema)
    return [parse_document(document, schema, index=position) for position, document in enumerate(validated, start=1)]

"""Turn raw form input into schema-shaped corpus documents."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from qacorpus.models.documents import DocumentType, TrainingMetadata
from qacorpus.utils.validators import blank_to_none, is_blank, strip_text
from qacorpus.validation import Schema

# Form value selecting the untagged generic QA shape.
QA_TYPE = "qa"

FORM_FIELDS: Tuple[str, ...] = (
    "type",
    "context",
    "category",
    "subcategory",
    "name",
    "prompt",
    "response",
    "action",
    "next-prompt",
    "source",
    "attribution",
)

# Type, context and category are session state and survive a form reset.
DATA_ENTRY_FIELDS: Tuple[str, ...] = (
    "subcategory",
    "prompt",
    "response",
    "action",
    "next-prompt",
    "source",
    "attribution",
)

_TYPE_SPECIFIC: Dict[str, Tuple[str, ...]] = {
    DocumentType.FAQ.value: ("response",),
    DocumentType.REVERSE_PROMPT.value: ("name", "action", "next-prompt"),
}


def selected_type(form: Mapping[str, Any]) -> Optional[str]:
    """Return the tagged type chosen in ``form``, or ``None`` for a generic QA pair."""

    value = blank_to_none(form.get("type"))
    if value is None or value == QA_TYPE:
        return None
    return value


def schema_for(document: Mapping[str, Any]) -> Schema:
    return Schema.QA if document.get("type") is None else Schema.PROMPTME


def has_unsaved_data(form: Mapping[str, Any]) -> bool:
    return any(not is_blank(form.get(name)) for name in DATA_ENTRY_FIELDS)


class DocumentShaper:
    """Collect form fields into one of the three document shapes.

    Required text is trimmed; optional text that is blank becomes ``None``.
    Nothing is validated here, `PendingBatch.append` does that.
    """

    def shape(self, form: Mapping[str, Any]) -> Dict[str, Any]:
        document_type = selected_type(form)
        if document_type is None:
            return self._shape_qa_pair(form)
        return self._shape_tagged(document_type, form)

    def _shape_tagged(self, document_type: str, form: Mapping[str, Any]) -> Dict[str, Any]:
        document: Dict[str, Any] = {
            "type": document_type,
            "context": strip_text(form.get("context")),
            "category": strip_text(form.get("category")),
            "subcategory": blank_to_none(form.get("subcategory")),
            "prompt": strip_text(form.get("prompt")),
        }
        for name in _TYPE_SPECIFIC.get(document_type, ()):
            document[name] = strip_text(form.get(name))
        document["source"] = blank_to_none(form.get("source"))
        document["attribution"] = blank_to_none(form.get("attribution"))
        return document

    def _shape_qa_pair(self, form: Mapping[str, Any]) -> Dict[str, Any]:
        prompt = strip_text(form.get("prompt"))
        response = strip_text(form.get("response"))
        return {
            "prompt": prompt,
            "response": response,
            "source": blank_to_none(form.get("source")),
            "attribution": blank_to_none(form.get("attribution")),
            "training_metadata": TrainingMetadata.for_pair(prompt, response).model_dump(),
        }


def form_fields(document: Mapping[str, Any]) -> Dict[str, str]:
    """Map a shaped document back onto form input so it can be edited."""

    fields = {name: "" if document.get(name) is None else str(document[name]) for name in FORM_FIELDS}
    if document.get("type") is None:
        fields["type"] = QA_TYPE
    return fields

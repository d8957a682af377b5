from qacorpus.shaping.batch import PendingBatch
from qacorpus.shaping.shaper import (
    DATA_ENTRY_FIELDS,
    FORM_FIELDS,
    QA_TYPE,
    DocumentShaper,
    form_fields,
    has_unsaved_data,
    schema_for,
    selected_type,
)

__all__ = [
    "DATA_ENTRY_FIELDS",
    "DocumentShaper",
    "FORM_FIELDS",
    "PendingBatch",
    "QA_TYPE",
    "form_fields",
    "has_unsaved_data",
    "schema_for",
    "selected_type",
]

"""Local queue of shaped documents waiting to be ingested."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping

from qacorpus.validation import Schema, validate_document

logger = logging.getLogger(__name__)


class PendingBatch:
    """Shaped-but-unpersisted documents, addressed only by position.

    Every mutation is local. Nothing reaches the API until the batch is handed
    to `CorpusClient.submit`.
    """

    def __init__(self, schema: Schema = Schema.PROMPTME) -> None:
        self.schema = schema
        self._documents: List[Dict[str, Any]] = []

    def append(self, document: Mapping[str, Any]) -> int:
        """Validate ``document`` and queue it; returns the new batch size."""

        validate_document(document, self.schema)
        self._documents.append(dict(document))
        return len(self._documents)

    def remove_for_edit(self, index: int) -> Dict[str, Any]:
        """Pop the document at ``index`` so its fields can be edited and re-added."""

        if not 0 <= index < len(self._documents):
            raise IndexError(f"No pending document at position {index}")
        return self._documents.pop(index)

    def clear(self) -> None:
        logger.debug("Clearing %d pending %s documents", len(self._documents), self.schema.value)
        self._documents.clear()

    @property
    def documents(self) -> List[Dict[str, Any]]:
        return [dict(document) for document in self._documents]

    def payload(self) -> Dict[str, List[Dict[str, Any]]]:
        return {"documents": self.documents}

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.documents)

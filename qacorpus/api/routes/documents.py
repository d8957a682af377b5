"""Read-only listing of stored documents, mostly for debugging."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from qacorpus.api.dependencies import get_store
from qacorpus.core.config import settings
from qacorpus.core.database import DocumentStore
from qacorpus.core.exceptions import NotFoundError, StoreError
from qacorpus.models import DocumentType

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])

TAGGED_QUERY: Dict[str, Any] = {"type": {"$in": [member.value for member in DocumentType]}}
UNTAGGED_QUERY: Dict[str, Any] = {"type": {"$exists": False}}


def _effective_limit(limit: Optional[str]) -> int:
    # Missing, non-numeric and non-positive values all fall back to the default.
    try:
        value = int(limit) if limit is not None else 0
    except ValueError:
        value = 0
    if value < 1:
        value = settings.DEFAULT_LIST_LIMIT
    return min(value, settings.MAX_LIST_LIMIT)


async def _list(store: DocumentStore, query: Dict[str, Any], limit: Optional[str]) -> List[Dict[str, Any]]:
    try:
        return await store.find(query, _effective_limit(limit))
    except StoreError as exc:
        logger.error("Error fetching QA pairs: %s", exc.message)
        raise StoreError("Failed to fetch QA pairs") from exc


@router.get("/promptme")
async def list_promptme(
    limit: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    """Most recent FAQ and reverse-prompt documents."""

    return await _list(store, TAGGED_QUERY, limit)


@router.get("/qa-pairs")
async def list_qa_pairs(
    limit: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    """Most recent generic QA pairs."""

    return await _list(store, UNTAGGED_QUERY, limit)


@router.get("/documents/{document_id}")
async def get_document(document_id: str, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    document = await store.find_by_id(document_id)
    if document is None:
        raise NotFoundError(f"Document {document_id} not found")
    return document

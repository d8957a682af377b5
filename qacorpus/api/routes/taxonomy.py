"""Context and category lookups."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from qacorpus.api.dependencies import get_store
from qacorpus.core.database import DocumentStore
from qacorpus.core.exceptions import StoreError
from qacorpus.models import TaxonomyEntry
from qacorpus.services.taxonomy import list_categories, list_contexts

logger = logging.getLogger(__name__)

router = APIRouter(tags=["taxonomy"])


@router.get("/contexts", response_model=List[TaxonomyEntry])
async def get_contexts(
    type: Optional[str] = None,
    store: DocumentStore = Depends(get_store),
) -> List[TaxonomyEntry]:
    try:
        return await list_contexts(store, type)
    except StoreError as exc:
        logger.error("Error fetching contexts: %s", exc.message)
        raise StoreError("Failed to fetch contexts") from exc


@router.get("/categories", response_model=List[TaxonomyEntry])
async def get_categories(
    context: Optional[str] = None,
    store: DocumentStore = Depends(get_store),
) -> List[TaxonomyEntry]:
    try:
        return await list_categories(store, context)
    except StoreError as exc:
        logger.error("Error fetching categories: %s", exc.message)
        raise StoreError("Failed to fetch categories") from exc

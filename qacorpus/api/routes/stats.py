from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from qacorpus.api.dependencies import get_store
from qacorpus.core.database import DocumentStore
from qacorpus.core.exceptions import StoreError
from qacorpus.models import CollectionStats

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=CollectionStats)
async def get_stats(store: DocumentStore = Depends(get_store)) -> CollectionStats:
    """Token totals, average weighting and optional-field counts for the corpus."""

    try:
        return await store.aggregate_stats()
    except StoreError as exc:
        logger.error("Error fetching stats: %s", exc.message)
        raise StoreError("Failed to fetch collection statistics") from exc

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from qacorpus.api.dependencies import get_store
from qacorpus.core.database import DocumentStore
from qacorpus.core.exceptions import StoreError
from qacorpus.models import HealthResponse
from qacorpus.utils.clock import utc_timestamp

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
async def healthcheck(store: DocumentStore = Depends(get_store)):
    """Report store connectivity; an unreachable store yields 503 rather than an error."""

    try:
        await store.ping()
    except StoreError as exc:
        logger.warning("Health check failed: %s", exc.message)
        unhealthy = HealthResponse(
            status="unhealthy",
            database="disconnected",
            error=exc.message,
            timestamp=utc_timestamp(),
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=unhealthy.model_dump(exclude_none=True),
        )

    return HealthResponse(
        status="healthy",
        database="connected",
        collection=store.collection_name,
        timestamp=utc_timestamp(),
    )

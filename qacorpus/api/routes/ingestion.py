"""FastAPI routes for batch ingestion of corpus documents."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from qacorpus.api.dependencies import get_store
from qacorpus.core.database import DocumentStore
from qacorpus.core.exceptions import DocumentValidationError, StoreError
from qacorpus.models import IngestionResponse
from qacorpus.utils.clock import utc_timestamp
from qacorpus.utils.monitoring import record_ingestion
from qacorpus.validation import Schema, parse_batch

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ingestion"])


async def ingest_documents(payload: Dict[str, Any], schema: Schema, store: DocumentStore) -> IngestionResponse:
    """Revalidate a submitted batch and persist it with a single ``insert_many``.

    Any invalid document rejects the whole request before the store is touched.
    """

    try:
        documents = parse_batch(payload.get("documents"), schema)
    except DocumentValidationError as exc:
        logger.info("Rejected %s batch: %s", schema.value, exc.message)
        raise

    ingested_at = utc_timestamp()
    records: List[Dict[str, Any]] = []
    for document in documents:
        record = document.to_record()
        if not record.get("created_at"):
            record["created_at"] = ingested_at
        records.append(record)

    try:
        inserted = await store.insert_many(records)
    except StoreError as exc:
        logger.error("Error inserting QA pairs: %s", exc.message)
        raise StoreError(f"Failed to insert QA pairs: {exc.message}") from exc

    record_ingestion(schema.value, inserted)
    logger.info("Inserted %d %s documents", inserted, schema.value)

    return IngestionResponse(
        success=True,
        inserted_count=inserted,
        message=f"Successfully inserted {inserted} QA pairs",
    )


@router.post("/insert-promptme", response_model=IngestionResponse)
async def insert_promptme(
    payload: Dict[str, Any] = Body(...),
    store: DocumentStore = Depends(get_store),
) -> IngestionResponse:
    """Ingest a batch of FAQ and reverse-prompt documents."""

    return await ingest_documents(payload, Schema.PROMPTME, store)


@router.post("/insert-qa-pairs", response_model=IngestionResponse)
async def insert_qa_pairs(
    payload: Dict[str, Any] = Body(...),
    store: DocumentStore = Depends(get_store),
) -> IngestionResponse:
    """Ingest a batch of generic prompt/response pairs."""

    return await ingest_documents(payload, Schema.QA, store)

"""HTTP client used by the shaping side to talk to the corpus API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from qacorpus.core.config import settings
from qacorpus.models import CollectionStats
from qacorpus.shaping import PendingBatch
from qacorpus.validation import Schema

logger = logging.getLogger(__name__)

INGESTION_PATHS: Dict[Schema, str] = {
    Schema.PROMPTME: "/api/insert-promptme",
    Schema.QA: "/api/insert-qa-pairs",
}


class CorpusClientError(RuntimeError):
    """The API rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CorpusClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.CORPUS_API_URL,
            timeout=timeout if timeout is not None else settings.CLIENT_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "CorpusClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise CorpusClientError(f"Request to {path} failed: {exc}") from exc

        if response.is_error:
            try:
                message = response.json().get("error") or response.text
            except ValueError:
                message = response.text
            raise CorpusClientError(message, status_code=response.status_code)
        return response.json()

    async def contexts(self, document_type: Optional[str] = None) -> List[str]:
        params = {"type": document_type} if document_type else None
        entries = await self._request("GET", "/api/contexts", params=params)
        return [entry["name"] for entry in entries]

    async def categories(self, context: Optional[str] = None) -> List[str]:
        params = {"context": context} if context else None
        entries = await self._request("GET", "/api/categories", params=params)
        return [entry["name"] for entry in entries]

    async def stats(self) -> CollectionStats:
        return CollectionStats.model_validate(await self._request("GET", "/api/stats"))

    async def health(self) -> Dict[str, Any]:
        try:
            return await self._request("GET", "/api/health")
        except CorpusClientError as exc:
            if exc.status_code is None:
                raise
            return {"status": "unhealthy", "error": exc.message}

    async def submit(self, batch: PendingBatch) -> int:
        """Send every pending document in one request; the batch is cleared only on success."""

        if not len(batch):
            raise CorpusClientError("No pending documents to submit")

        body = await self._request("POST", INGESTION_PATHS[batch.schema], json=batch.payload())
        inserted = int(body["insertedCount"])
        logger.info("Submitted %d %s documents", inserted, batch.schema.value)
        batch.clear()
        return inserted

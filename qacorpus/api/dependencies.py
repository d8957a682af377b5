from __future__ import annotations

from fastapi import Request

from qacorpus.core.database import DocumentStore


async def get_store(request: Request) -> DocumentStore:
    return request.app.state.store

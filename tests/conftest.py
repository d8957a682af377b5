from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from qacorpus.api.main import create_app
from qacorpus.core.database import to_object_id
from qacorpus.core.exceptions import StoreError
from qacorpus.services.statistics import summarize


def _matches(document: Dict[str, Any], query: Optional[Dict[str, Any]]) -> bool:
    for key, condition in (query or {}).items():
        if isinstance(condition, dict):
            if "$in" in condition and document.get(key) not in condition["$in"]:
                return False
            if "$exists" in condition and (key in document) != condition["$exists"]:
                return False
        elif document.get(key) != condition:
            return False
    return True


class InMemoryStore:
    """Stand-in for DocumentStore that keeps documents in a list."""

    collection_name = "qa-pairs"

    def __init__(self) -> None:
        self.documents: List[Dict[str, Any]] = []
        self.insert_calls = 0
        self.failure: Optional[str] = None
        self.closed = False

    def _check(self) -> None:
        if self.failure:
            raise StoreError(self.failure)

    async def ping(self) -> None:
        self._check()

    async def insert_many(self, documents):
        self._check()
        self.insert_calls += 1
        for document in documents:
            self.documents.append({**document, "_id": str(ObjectId())})
        return len(documents)

    async def find(self, query=None, limit=10):
        self._check()
        return [dict(doc) for doc in self.documents if _matches(doc, query)][:limit]

    async def find_by_id(self, document_id):
        to_object_id(document_id)
        self._check()
        for document in self.documents:
            if document["_id"] == document_id:
                return dict(document)
        return None

    async def distinct(self, field, query=None):
        self._check()
        values = []
        for document in self.documents:
            if _matches(document, query) and field in document and document[field] not in values:
                values.append(document[field])
        return values

    async def aggregate_stats(self):
        self._check()
        if not self.documents:
            return summarize(None)
        metadata = [doc.get("training_metadata") or {} for doc in self.documents]
        weights = [meta["weighting"] for meta in metadata if meta.get("weighting") is not None]
        return summarize(
            {
                "_id": None,
                "totalPairs": len(self.documents),
                "totalPromptTokens": sum(meta.get("prompt_tokens", 0) for meta in metadata),
                "totalResponseTokens": sum(meta.get("response_tokens", 0) for meta in metadata),
                "totalTokens": sum(meta.get("total_tokens", 0) for meta in metadata),
                "averageWeight": sum(weights) / len(weights) if weights else None,
                "withSource": sum(1 for doc in self.documents if doc.get("source") is not None),
                "withAttribution": sum(1 for doc in self.documents if doc.get("attribution") is not None),
            }
        )

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def app(store):
    return create_app(store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def faq_document():
    return {
        "type": "faq",
        "context": "nutrition",
        "category": "basics",
        "prompt": "What is protein?",
        "response": "A macronutrient.",
    }


@pytest.fixture
def reverse_prompt_document():
    return {
        "type": "reverse-prompt",
        "name": "log-meal",
        "context": "tracking",
        "category": "meals",
        "prompt": "I just had lunch",
        "action": "open_meal_logger",
        "next-prompt": "What did you eat?",
    }


@pytest.fixture
def qa_document():
    return {
        "prompt": "How much water should I drink?",
        "response": "Roughly two litres a day for most adults.",
        "source": "Health handbook",
        "attribution": None,
        "training_metadata": {"weighting": 5},
    }

"""Distinct context and category lookups that drive cascading selection."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Protocol

from qacorpus.models.responses import TaxonomyEntry
from qacorpus.utils.validators import is_blank


class DistinctSource(Protocol):
    async def distinct(self, field: str, query: Optional[Dict[str, Any]] = None) -> List[Any]:
        ...


def _entries(values: Iterable[Any]) -> List[TaxonomyEntry]:
    names = {str(value).strip() for value in values if not is_blank(value)}
    return [TaxonomyEntry(name=name) for name in sorted(names)]


def _filter(field: str, value: Optional[str]) -> Dict[str, Any]:
    if is_blank(value):
        return {}
    return {field: value}


async def list_contexts(store: DistinctSource, document_type: Optional[str] = None) -> List[TaxonomyEntry]:
    """Distinct contexts, restricted to ``document_type`` when one is given."""

    values = await store.distinct("context", _filter("type", document_type))
    return _entries(values)


async def list_categories(store: DistinctSource, context: Optional[str] = None) -> List[TaxonomyEntry]:
    """Distinct categories, restricted to ``context`` when one is given."""

    values = await store.distinct("category", _filter("context", context))
    return _entries(values)

"""Aggregate statistics over the corpus collection."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from qacorpus.models.responses import CollectionStats


def _count_present(field: str) -> Dict[str, Any]:
    # Missing fields sort below null in BSON order, so `$gt: null` counts only real values.
    return {"$sum": {"$cond": [{"$gt": [f"${field}", None]}, 1, 0]}}


STATS_PIPELINE: List[Dict[str, Any]] = [
    {
        "$group": {
            "_id": None,
            "totalPairs": {"$sum": 1},
            "totalPromptTokens": {"$sum": "$training_metadata.prompt_tokens"},
            "totalResponseTokens": {"$sum": "$training_metadata.response_tokens"},
            "totalTokens": {"$sum": "$training_metadata.total_tokens"},
            "averageWeight": {"$avg": "$training_metadata.weighting"},
            "withSource": _count_present("source"),
            "withAttribution": _count_present("attribution"),
        }
    }
]


def summarize(row: Optional[Mapping[str, Any]]) -> CollectionStats:
    """Build the stats record from the `$group` output, zero-filling gaps.

    An empty collection produces no row at all, and `$avg` yields null when no
    document carries a weighting; both become zeros.
    """

    if not row:
        return CollectionStats()
    values = {key: value for key, value in row.items() if key != "_id" and value is not None}
    return CollectionStats.model_validate(values)

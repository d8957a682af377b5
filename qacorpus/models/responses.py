"""Response data model definitions."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class IngestionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    inserted_count: int = Field(..., alias="insertedCount")
    message: str


class TaxonomyEntry(BaseModel):
    name: str


class CollectionStats(BaseModel):
    """Aggregate counters over every stored document."""

    model_config = ConfigDict(populate_by_name=True)

    total_pairs: int = Field(0, alias="totalPairs")
    total_prompt_tokens: int = Field(0, alias="totalPromptTokens")
    total_response_tokens: int = Field(0, alias="totalResponseTokens")
    total_tokens: int = Field(0, alias="totalTokens")
    average_weight: float = Field(0, alias="averageWeight")
    with_source: int = Field(0, alias="withSource")
    with_attribution: int = Field(0, alias="withAttribution")


class HealthResponse(BaseModel):
    status: str
    database: str
    collection: Optional[str] = None
    error: Optional[str] = None
    timestamp: str

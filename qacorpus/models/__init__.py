from .documents import (
    DEFAULT_WEIGHTING,
    CorpusDocument,
    DocumentType,
    FaqDocument,
    PromptMeDocument,
    QAPairDocument,
    ReversePromptDocument,
    ShapedDocument,
    TrainingMetadata,
)
from .responses import CollectionStats, HealthResponse, IngestionResponse, TaxonomyEntry

__all__ = [
    "CollectionStats",
    "CorpusDocument",
    "DEFAULT_WEIGHTING",
    "DocumentType",
    "FaqDocument",
    "HealthResponse",
    "IngestionResponse",
    "PromptMeDocument",
    "QAPairDocument",
    "ReversePromptDocument",
    "ShapedDocument",
    "TaxonomyEntry",
    "TrainingMetadata",
]

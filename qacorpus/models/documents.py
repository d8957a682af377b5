"""Corpus document data model definitions.

Three shapes are stored side by side in one collection:

* ``FaqDocument`` and ``ReversePromptDocument`` carry a ``type`` tag and form
  the discriminated ``PromptMeDocument`` union.
* ``QAPairDocument`` is untagged and carries ``training_metadata``.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, computed_field, model_validator

from qacorpus.utils.tokens import estimate_tokens
from qacorpus.utils.validators import blank_to_none, strip_text

# Fixed weighting attached to every generic QA pair.
DEFAULT_WEIGHTING = 5

RequiredText = Annotated[str, BeforeValidator(strip_text)]
OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]


class DocumentType(str, Enum):
    """Discriminator values for tagged documents."""

    FAQ = "faq"
    REVERSE_PROMPT = "reverse-prompt"


class TrainingMetadata(BaseModel):
    prompt_tokens: int = Field(0, ge=0)
    response_tokens: int = Field(0, ge=0)
    weighting: int = DEFAULT_WEIGHTING

    @computed_field  # type: ignore[misc]
    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.response_tokens

    @classmethod
    def for_pair(cls, prompt: Any, response: Any, weighting: int = DEFAULT_WEIGHTING) -> "TrainingMetadata":
        return cls(
            prompt_tokens=estimate_tokens(prompt),
            response_tokens=estimate_tokens(response),
            weighting=weighting,
        )


class CorpusDocument(BaseModel):
    """Fields shared by every stored document."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: RequiredText
    source: OptionalText = None
    attribution: OptionalText = None
    created_at: OptionalText = None

    def to_record(self) -> Dict[str, Any]:
        """Serialize into the JSON shape persisted to the store."""

        return self.model_dump(by_alias=True, mode="json")


class TaggedDocument(CorpusDocument):
    context: RequiredText
    category: RequiredText
    subcategory: OptionalText = None


class FaqDocument(TaggedDocument):
    type: Literal["faq"] = DocumentType.FAQ.value
    response: RequiredText


class ReversePromptDocument(TaggedDocument):
    type: Literal["reverse-prompt"] = DocumentType.REVERSE_PROMPT.value
    name: RequiredText
    action: RequiredText
    next_prompt: RequiredText = Field(..., alias="next-prompt")


class QAPairDocument(CorpusDocument):
    response: RequiredText
    training_metadata: Optional[TrainingMetadata] = None

    @model_validator(mode="after")
    def _derive_training_metadata(self) -> "QAPairDocument":
        # Derived from the text with the fixed weighting; caller values are discarded.
        self.training_metadata = TrainingMetadata.for_pair(self.prompt, self.response)
        return self


PromptMeDocument = Annotated[Union[FaqDocument, ReversePromptDocument], Field(discriminator="type")]
ShapedDocument = Union[FaqDocument, ReversePromptDocument, QAPairDocument]

promptme_adapter: TypeAdapter = TypeAdapter(PromptMeDocument)

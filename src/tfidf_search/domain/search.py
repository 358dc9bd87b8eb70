"""Value objects exchanged with callers of the search engine.

All models are immutable (frozen=True) so results handed out cannot be
mutated behind the engine's back.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A document to index. Only ``id`` and ``content`` reach the index."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str = ""
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class SearchResult(BaseModel):
    """One ranked hit for a query."""

    model_config = ConfigDict(frozen=True)

    document_id: str
    score: float
    matched_terms: list[str] = Field(default_factory=list)


class TermImportance(BaseModel):
    """A term of a document with its TF-IDF score and raw frequency."""

    model_config = ConfigDict(frozen=True)

    term: str
    score: float
    frequency: int = Field(default=0, ge=0)

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, TypedDict

from news_trends.errors import InvalidInputError

Vocabulary = Dict[str, int]


@dataclass(frozen=True)
class Document:
    """Raw text plus its position in the corpus."""

    doc_id: int
    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise InvalidInputError(
                f"Document {self.doc_id} text must be a string, got {type(self.text).__name__}"
            )


@dataclass(frozen=True)
class ExcludedDocument:
    """Marker for a raw corpus entry that could not become a Document."""

    position: int
    reason: str


class RankedKeyword(TypedDict):
    keyword: str
    tfidf: float

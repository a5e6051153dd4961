"""Document models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Document:
    """A stored, classified document."""

    id: int
    title: str
    content: str
    summary: str
    category: str
    tags: list[str]
    word_count: int
    file_type: str
    created_at: datetime
    updated_at: datetime
    file_path: str | None = None


@dataclass
class ScoredDocument:
    """A document paired with its relevance score for one query."""

    document: Document
    score: float


@dataclass
class DocumentProfile:
    """Classifier output for one upload."""

    title: str
    category: str
    tags: list[str] = field(default_factory=list)
    summary: str = ""
    word_count: int = 0


@dataclass
class StoredUpload:
    """An uploaded file that has been written to disk but not yet processed."""

    path: str
    original_name: str
    mime_type: str
    size: int = 0

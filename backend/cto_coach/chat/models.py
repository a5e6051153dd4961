"""Chat session and message models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

Role = Literal["user", "assistant"]


@dataclass
class ChatSession:
    """A conversation container. Never mutated after creation."""

    id: str
    created_at: datetime


@dataclass
class Message:
    """One turn of a conversation."""

    id: int
    session_id: str
    role: Role
    content: str
    created_at: datetime
    sources: list[int] | None = None


@dataclass
class ChatSource:
    """A document cited by an answer, with the snippet that matched."""

    id: int
    title: str
    relevant_content: str
    category: str
    tags: list[str] = field(default_factory=list)
    summary: str = ""


@dataclass
class ChatResult:
    """Answer text plus the documents it was grounded on."""

    answer: str
    sources: list[ChatSource] = field(default_factory=list)

"""In-memory store for development and testing."""

import itertools
import uuid
from collections import defaultdict
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from cto_coach.chat.models import ChatSession, Message, Role
from cto_coach.core.logging import get_logger
from cto_coach.documents.models import Document
from cto_coach.storage.factory import StoreFactory

logger = get_logger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "category", "tags", "summary"})


def matches_filters(
    document: Document,
    search: str | None = None,
    category: str | None = None,
    tags: list[str] | None = None,
) -> bool:
    """Apply the shared search, category and tag filters to one document."""
    if category and document.category != category:
        return False
    if tags and not set(tags).intersection(document.tags):
        return False
    if search:
        needle = search.lower()
        fields = (document.title, document.content, document.summary or "")
        if not any(needle in value.lower() for value in fields):
            return False
    return True


@StoreFactory.register("in_memory")
class InMemoryStore:
    """Dictionary-based document and chat store.

    Not persistent - data is lost on restart.
    """

    def __init__(self):
        self._documents: dict[int, Document] = {}
        self._sessions: dict[str, ChatSession] = {}
        self._messages: dict[str, list[Message]] = defaultdict(list)
        self._document_ids = itertools.count(1)
        self._message_ids = itertools.count(1)
        logger.debug("in_memory_store_initialized")

    async def initialize(self) -> None:
        """Nothing to prepare."""

    async def close(self) -> None:
        """Nothing to release."""

    # --- Documents ---

    async def create_document(
        self,
        *,
        title: str,
        content: str,
        summary: str,
        category: str,
        tags: list[str],
        word_count: int,
        file_type: str,
        file_path: str | None = None,
    ) -> Document:
        now = datetime.now(UTC)
        document = Document(
            id=next(self._document_ids),
            title=title,
            content=content,
            summary=summary,
            category=category,
            tags=list(tags),
            word_count=word_count,
            file_type=file_type,
            file_path=file_path,
            created_at=now,
            updated_at=now,
        )
        self._documents[document.id] = document
        logger.debug("document_stored", document_id=document.id, title=title)
        return replace(document)

    async def get_document(self, document_id: int) -> Document | None:
        document = self._documents.get(document_id)
        return replace(document) if document else None

    async def find_documents(
        self,
        search: str | None = None,
        category: str | None = None,
        tags: list[str] | None = None,
        limit: int | None = None,
    ) -> list[Document]:
        found = [
            replace(doc)
            for doc in self._documents.values()
            if matches_filters(doc, search=search, category=category, tags=tags)
        ]
        found.sort(key=lambda doc: (doc.created_at, doc.id), reverse=True)
        return found if limit is None else found[:limit]

    async def update_document(self, document_id: int, changes: dict[str, Any]) -> Document | None:
        document = self._documents.get(document_id)
        if document is None:
            return None

        fields = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
        updated = replace(document, **fields, updated_at=datetime.now(UTC))
        self._documents[document_id] = updated
        return replace(updated)

    async def delete_document(self, document_id: int) -> bool:
        return self._documents.pop(document_id, None) is not None

    async def list_categories(self) -> list[str]:
        return sorted({doc.category for doc in self._documents.values() if doc.category})

    async def list_tags(self) -> list[str]:
        return sorted({tag for doc in self._documents.values() for tag in doc.tags})

    # --- Chat ---

    async def create_session(self) -> ChatSession:
        session = ChatSession(id=str(uuid.uuid4()), created_at=datetime.now(UTC))
        self._sessions[session.id] = session
        logger.debug("session_created", session_id=session.id)
        return session

    async def get_session(self, session_id: str) -> ChatSession | None:
        return self._sessions.get(session_id)

    async def add_message(
        self,
        session_id: str,
        role: Role,
        content: str,
        sources: list[int] | None = None,
    ) -> Message:
        message = Message(
            id=next(self._message_ids),
            session_id=session_id,
            role=role,
            content=content,
            sources=list(sources) if sources is not None else None,
            created_at=datetime.now(UTC),
        )
        self._messages[session_id].append(message)
        logger.debug("message_added", session_id=session_id, role=role, message_length=len(content))
        return message

    async def list_messages(self, session_id: str) -> list[Message]:
        return sorted(self._messages.get(session_id, []), key=lambda m: (m.created_at, m.id))

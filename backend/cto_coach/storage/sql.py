"""Relational store backed by SQLAlchemy async.

SQLite (aiosqlite) by default, PostgreSQL (asyncpg) when the URL points there.
Tables are created on ``initialize``; there are no migrations.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text, or_, select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from cto_coach.chat.models import ChatSession, Message, Role
from cto_coach.core.logging import get_logger
from cto_coach.documents.models import Document
from cto_coach.storage.factory import StoreFactory
from cto_coach.storage.in_memory import UPDATABLE_FIELDS

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class DocumentRow(Base):
    """Uploaded, classified document."""

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    word_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    file_type: Mapped[str] = mapped_column(String(128), nullable=False)
    file_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)


class ChatSessionRow(Base):
    """Conversation container."""

    __tablename__ = "chat_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)


class MessageRow(Base):
    """One chat turn."""

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("chat_sessions.id"), nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    sources: Mapped[list[int] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)


def normalize_database_url(database_url: str) -> str:
    """Select the async driver for plain postgres and sqlite URLs.

    Examples:
        >>> normalize_database_url("postgresql://u:p@db:5432/coach")
        'postgresql+asyncpg://u:p@db:5432/coach'
    """
    if database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


def _aware(value: datetime) -> datetime:
    """SQLite drops the offset; stored values are always UTC."""
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


def _to_document(row: DocumentRow) -> Document:
    return Document(
        id=row.id,
        title=row.title,
        content=row.content,
        summary=row.summary,
        category=row.category,
        tags=list(row.tags or []),
        word_count=row.word_count,
        file_type=row.file_type,
        file_path=row.file_path,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _to_message(row: MessageRow) -> Message:
    return Message(
        id=row.id,
        session_id=row.session_id,
        role=row.role,  # type: ignore[arg-type]
        content=row.content,
        sources=list(row.sources) if row.sources is not None else None,
        created_at=_aware(row.created_at),
    )


@StoreFactory.register("sql")
class SqlStore:
    """SQLAlchemy-backed document and chat store."""

    def __init__(self, database_url: str, echo: bool = False, engine: AsyncEngine | None = None):
        self.database_url = normalize_database_url(database_url)
        self._engine = engine or create_async_engine(self.database_url, echo=echo, pool_pre_ping=True)
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)

    async def initialize(self) -> None:
        """Create tables if they do not exist."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("sql_store_initialized", url=self._engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        await self._engine.dispose()

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
        now = _utcnow()
        row = DocumentRow(
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
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
        logger.debug("document_stored", document_id=row.id, title=title)
        return _to_document(row)

    async def get_document(self, document_id: int) -> Document | None:
        async with self._session_factory() as session:
            row = await session.get(DocumentRow, document_id)
        return _to_document(row) if row else None

    async def find_documents(
        self,
        search: str | None = None,
        category: str | None = None,
        tags: list[str] | None = None,
        limit: int | None = None,
    ) -> list[Document]:
        stmt = select(DocumentRow).order_by(DocumentRow.created_at.desc(), DocumentRow.id.desc())
        if category:
            stmt = stmt.where(DocumentRow.category == category)
        if search:
            stmt = stmt.where(
                or_(
                    DocumentRow.title.icontains(search, autoescape=True),
                    DocumentRow.content.icontains(search, autoescape=True),
                    DocumentRow.summary.icontains(search, autoescape=True),
                )
            )
        if limit is not None and not tags:
            stmt = stmt.limit(limit)

        async with self._session_factory() as session:
            rows = (await session.scalars(stmt)).all()

        documents = [_to_document(row) for row in rows]
        # Tags are a JSON column, so "has any" is applied here for every dialect
        if tags:
            wanted = set(tags)
            documents = [doc for doc in documents if wanted.intersection(doc.tags)]
            if limit is not None:
                documents = documents[:limit]
        return documents

    async def update_document(self, document_id: int, changes: dict[str, Any]) -> Document | None:
        async with self._session_factory() as session:
            row = await session.get(DocumentRow, document_id)
            if row is None:
                return None
            for key, value in changes.items():
                if key in UPDATABLE_FIELDS:
                    setattr(row, key, list(value) if key == "tags" else value)
            row.updated_at = _utcnow()
            await session.commit()
        return _to_document(row)

    async def delete_document(self, document_id: int) -> bool:
        async with self._session_factory() as session:
            row = await session.get(DocumentRow, document_id)
            if row is None:
                return False
            await session.delete(row)
            await session.commit()
        return True

    async def list_categories(self) -> list[str]:
        stmt = select(DocumentRow.category).distinct().order_by(DocumentRow.category)
        async with self._session_factory() as session:
            return [category for category in (await session.scalars(stmt)).all() if category]

    async def list_tags(self) -> list[str]:
        async with self._session_factory() as session:
            tag_lists = (await session.scalars(select(DocumentRow.tags))).all()
        return sorted({tag for tags in tag_lists for tag in tags or []})

    # --- Chat ---

    async def create_session(self) -> ChatSession:
        row = ChatSessionRow(id=str(uuid.uuid4()), created_at=_utcnow())
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
        logger.debug("session_created", session_id=row.id)
        return ChatSession(id=row.id, created_at=row.created_at)

    async def get_session(self, session_id: str) -> ChatSession | None:
        async with self._session_factory() as session:
            row = await session.get(ChatSessionRow, session_id)
        return ChatSession(id=row.id, created_at=_aware(row.created_at)) if row else None

    async def add_message(
        self,
        session_id: str,
        role: Role,
        content: str,
        sources: list[int] | None = None,
    ) -> Message:
        row = MessageRow(
            session_id=session_id,
            role=role,
            content=content,
            sources=list(sources) if sources is not None else None,
            created_at=_utcnow(),
        )
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
        return _to_message(row)

    async def list_messages(self, session_id: str) -> list[Message]:
        stmt = (
            select(MessageRow)
            .where(MessageRow.session_id == session_id)
            .order_by(MessageRow.created_at, MessageRow.id)
        )
        async with self._session_factory() as session:
            rows = (await session.scalars(stmt)).all()
        return [_to_message(row) for row in rows]

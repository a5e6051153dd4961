"""Protocol interfaces for dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cto_coach.chat.models import ChatSession, Message, Role
    from cto_coach.documents.models import Document


@runtime_checkable
class LLMProvider(Protocol):
    """Text-in, text-out generation interface."""

    @property
    def provider_name(self) -> str:
        """Short provider identifier used in errors and logs."""
        ...

    async def generate(self, prompt: str) -> str:
        """Generate a completion for a single assembled prompt.

        Raises:
            LLMError: One of the typed subclasses on failure.
        """
        ...


@runtime_checkable
class ContentExtractor(Protocol):
    """Plain-text extraction from stored upload files."""

    async def extract(self, path: str, mime_type: str) -> str:
        """Return the text of the file at ``path``.

        Raises:
            UnsupportedFileTypeError: For MIME types outside the whitelist.
            ExtractionError: When the file cannot be read or parsed.
        """
        ...


@runtime_checkable
class DocumentStore(Protocol):
    """Document persistence interface."""

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
        """Persist a new document and assign its integer id."""
        ...

    async def get_document(self, document_id: int) -> Document | None:
        """Get a document by id, or None."""
        ...

    async def find_documents(
        self,
        search: str | None = None,
        category: str | None = None,
        tags: list[str] | None = None,
        limit: int | None = None,
    ) -> list[Document]:
        """List documents, newest first.

        Args:
            search: Case-insensitive "contains" filter on title, content and summary
            category: Exact category match
            tags: Keep documents carrying at least one of these tags
            limit: Maximum number of documents to return
        """
        ...

    async def update_document(self, document_id: int, changes: dict[str, Any]) -> Document | None:
        """Apply field changes and refresh ``updated_at``. None if absent."""
        ...

    async def delete_document(self, document_id: int) -> bool:
        """Delete a document. Returns False if it did not exist."""
        ...

    async def list_categories(self) -> list[str]:
        """Distinct categories in use, sorted."""
        ...

    async def list_tags(self) -> list[str]:
        """Distinct tags in use, sorted."""
        ...


@runtime_checkable
class ChatStore(Protocol):
    """Chat session and message persistence interface."""

    async def create_session(self) -> ChatSession:
        """Create a session with a fresh UUID."""
        ...

    async def get_session(self, session_id: str) -> ChatSession | None:
        """Get a session by id, or None."""
        ...

    async def add_message(
        self,
        session_id: str,
        role: Role,
        content: str,
        sources: list[int] | None = None,
    ) -> Message:
        """Append a message to a session."""
        ...

    async def list_messages(self, session_id: str) -> list[Message]:
        """Messages of a session in ascending creation order."""
        ...

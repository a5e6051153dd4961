"""Document upload, search and management."""

import secrets
import time
from pathlib import Path
from typing import Any

from cto_coach.core.exceptions import FileStorageError, NotFoundError, ValidationError
from cto_coach.core.logging import get_logger
from cto_coach.core.protocols import ContentExtractor, DocumentStore
from cto_coach.core.validators import sanitize_filename
from cto_coach.documents.classifier import CATEGORIES, DEFAULT_CATEGORY, classify
from cto_coach.documents.models import Document, ScoredDocument, StoredUpload
from cto_coach.documents.scoring import DEFAULT_WEIGHTS, ScoringWeights, rank_documents

logger = get_logger(__name__)


class DocumentService:
    """Turns uploads into classified documents and serves them back.

    Args:
        store: Document persistence backend
        extractor: Text extractor for stored uploads
        upload_dir: Directory uploaded files are written to
        weights: Relevance scoring weights
        default_limit: Number of results returned by ``search_documents``
    """

    def __init__(
        self,
        store: DocumentStore,
        extractor: ContentExtractor,
        upload_dir: str | Path = "uploads",
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        default_limit: int = 5,
    ):
        self.store = store
        self.extractor = extractor
        self.upload_dir = Path(upload_dir)
        self.weights = weights
        self.default_limit = default_limit

    # --- Upload ---

    def save_upload(self, filename: str, data: bytes, mime_type: str) -> StoredUpload:
        """Write raw upload bytes as ``<millis>-<random>-<name>`` in the upload dir.

        Raises:
            FileStorageError: The file could not be written
        """
        stored_name = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}-{sanitize_filename(filename)}"
        path = self.upload_dir / stored_name
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.error("upload_write_failed", filename=filename, error=str(e))
            raise FileStorageError(f"Failed to store uploaded file: {filename}") from e

        return StoredUpload(path=str(path), original_name=filename, mime_type=mime_type, size=len(data))

    async def process_upload(self, upload: StoredUpload) -> Document:
        """Extract, classify and persist a stored upload.

        The stored file is removed if any step fails; the original error is
        re-raised.
        """
        logger.info(
            "document_upload_started",
            filename=upload.original_name,
            mime_type=upload.mime_type,
            size=upload.size,
        )
        try:
            content = await self.extractor.extract(upload.path, upload.mime_type)
            profile = classify(upload.original_name, content)
            document = await self.store.create_document(
                title=profile.title,
                content=content,
                summary=profile.summary,
                category=profile.category,
                tags=profile.tags,
                word_count=profile.word_count,
                file_type=upload.mime_type,
                file_path=upload.path,
            )
        except Exception as e:
            logger.error("document_upload_failed", filename=upload.original_name, error=str(e))
            self._remove_file(upload.path)
            raise

        logger.info(
            "document_uploaded",
            document_id=document.id,
            title=document.title,
            category=document.category,
            tags=document.tags,
            word_count=document.word_count,
        )
        return document

    # --- Search ---

    async def search_documents(
        self,
        query: str,
        limit: int | None = None,
        category: str | None = None,
        tags: list[str] | None = None,
    ) -> list[ScoredDocument]:
        """Score every candidate document and return the best ``limit``.

        Store failures degrade to an empty result.
        """
        limit = self.default_limit if limit is None else limit
        try:
            candidates = await self.store.find_documents(category=category, tags=tags)
        except Exception as e:
            logger.error("document_search_failed", query=query[:100], error=str(e))
            return []

        results = rank_documents(query, candidates, limit=limit, weights=self.weights)
        logger.debug(
            "document_search_completed",
            candidates=len(candidates),
            returned=len(results),
            top_score=results[0].score if results else None,
        )
        return results

    async def list_documents(
        self,
        search: str | None = None,
        category: str | None = None,
        tags: list[str] | None = None,
    ) -> list[Document]:
        """Documents newest first, with optional contains/category/tag filters."""
        return await self.store.find_documents(search=search or None, category=category, tags=tags)

    # --- Single document ---

    async def get_document(self, document_id: int) -> Document:
        document = await self.store.get_document(document_id)
        if document is None:
            raise NotFoundError("Document", document_id)
        return document

    async def update_document(
        self,
        document_id: int,
        title: str | None = None,
        category: str | None = None,
        tags: list[str] | None = None,
    ) -> Document:
        """Edit title, category or tags of a document.

        Raises:
            ValidationError: Blank title or unknown category
            NotFoundError: No such document
        """
        changes: dict[str, Any] = {}
        if title is not None:
            if not title.strip():
                raise ValidationError("Title must not be blank", field="title")
            changes["title"] = title.strip()
        if category is not None:
            if category not in CATEGORIES and category != DEFAULT_CATEGORY:
                raise ValidationError(f"Unknown category: {category}", field="category")
            changes["category"] = category
        if tags is not None:
            changes["tags"] = list(dict.fromkeys(tag.strip() for tag in tags if tag.strip()))

        document = await self.store.update_document(document_id, changes)
        if document is None:
            raise NotFoundError("Document", document_id)

        logger.info("document_updated", document_id=document_id, fields=sorted(changes))
        return document

    async def delete_document(self, document_id: int) -> None:
        """Delete the stored file, then the record.

        Raises:
            NotFoundError: No such document; nothing is touched
        """
        document = await self.store.get_document(document_id)
        if document is None:
            raise NotFoundError("Document", document_id)

        if document.file_path:
            self._remove_file(document.file_path)

        await self.store.delete_document(document_id)
        logger.info("document_deleted", document_id=document_id)

    # --- Facets ---

    async def get_categories(self) -> list[str]:
        return await self.store.list_categories()

    async def get_tags(self) -> list[str]:
        return await self.store.list_tags()

    def _remove_file(self, path: str) -> None:
        """Best-effort file removal. Failures are logged, never raised."""
        try:
            Path(path).unlink()
        except OSError as e:
            logger.warning("file_cleanup_failed", path=path, error=str(e))

"""API routes for chat, documents and health."""

from datetime import UTC, datetime

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, File, Query, UploadFile

from cto_coach.api.schemas import (
    CategoriesResponse,
    ChatHistoryResponse,
    ChatMessageRequest,
    ChatMessageResponse,
    ChatSourceResponse,
    DocumentDeleteResponse,
    DocumentDetail,
    DocumentInfo,
    DocumentListResponse,
    DocumentSearchResponse,
    DocumentSearchResult,
    DocumentUpdateRequest,
    DocumentUploadResponse,
    HealthResponse,
    MessageResponse,
    SessionResponse,
    TagsResponse,
)
from cto_coach.chat.service import ChatService
from cto_coach.core.config import AppConfig
from cto_coach.core.di_container import DIContainer
from cto_coach.core.exceptions import ValidationError
from cto_coach.core.validators import (
    resolve_mime_type,
    validate_file_size,
    validate_filename,
    validate_pdf_header,
)
from cto_coach.documents.service import DocumentService

chat_router = APIRouter(prefix="/chat", tags=["chat"])
documents_router = APIRouter(prefix="/documents", tags=["documents"])
health_router = APIRouter(tags=["health"])

router = APIRouter()


def parse_tags(tags: str | None) -> list[str] | None:
    """Split a comma-separated ``tags`` query parameter."""
    if not tags:
        return None
    parsed = [tag.strip() for tag in tags.split(",") if tag.strip()]
    return parsed or None


# === Chat Endpoints ===


@chat_router.post("/session", response_model=SessionResponse, status_code=201)
@inject
async def create_session(
    chat_service: ChatService = Depends(Provide[DIContainer.chat_service]),  # noqa: B008
) -> SessionResponse:
    """Create a new chat session."""
    session = await chat_service.create_session()
    return SessionResponse(session_id=session.id, created_at=session.created_at)


@chat_router.post("/message", response_model=ChatMessageResponse)
@inject
async def send_message(
    request: ChatMessageRequest,
    chat_service: ChatService = Depends(Provide[DIContainer.chat_service]),  # noqa: B008
) -> ChatMessageResponse:
    """Answer a question using the document knowledge base."""
    result = await chat_service.process_message(request.message, request.session_id)
    return ChatMessageResponse(
        response=result.answer,
        sources=[ChatSourceResponse.model_validate(source) for source in result.sources],
        session_id=request.session_id,
        timestamp=datetime.now(UTC),
    )


@chat_router.get("/history/{session_id}", response_model=ChatHistoryResponse)
@inject
async def get_history(
    session_id: str,
    chat_service: ChatService = Depends(Provide[DIContainer.chat_service]),  # noqa: B008
) -> ChatHistoryResponse:
    """Get the messages of a session in creation order."""
    messages = await chat_service.get_history(session_id)
    return ChatHistoryResponse(
        messages=[MessageResponse.model_validate(message) for message in messages],
        session_id=session_id,
        total_count=len(messages),
    )


# === Document Endpoints ===


@documents_router.post("/upload", response_model=DocumentUploadResponse, status_code=201)
@inject
async def upload_document(
    document: UploadFile | None = File(default=None),  # noqa: B008
    config: AppConfig = Depends(Provide[DIContainer.config]),  # noqa: B008
    document_service: DocumentService = Depends(Provide[DIContainer.document_service]),  # noqa: B008
) -> DocumentUploadResponse:
    """Upload a text, Markdown or PDF file.

    The file is stored, its text extracted and classified, and the resulting
    document persisted. A failed upload leaves no file behind.
    """
    if document is None:
        raise ValidationError("No file uploaded", field="document")

    filename = document.filename or ""
    is_valid, error = validate_filename(filename)
    if not is_valid:
        raise ValidationError(error or "Invalid filename", field="document")

    data = await document.read()
    is_valid, error = validate_file_size(len(data), config.upload.max_file_size)
    if not is_valid:
        raise ValidationError(error or "Invalid file size", field="document")

    mime_type = resolve_mime_type(filename, document.content_type)
    if mime_type == "application/pdf":
        is_valid, error = validate_pdf_header(data)
        if not is_valid:
            raise ValidationError(error or "Invalid PDF file", field="document")

    upload = document_service.save_upload(filename, data, mime_type)
    created = await document_service.process_upload(upload)

    return DocumentUploadResponse(
        id=created.id,
        title=created.title,
        file_type=created.file_type,
        category=created.category,
        tags=created.tags,
        summary=created.summary,
        word_count=created.word_count,
        message="Document processed successfully",
        created_at=created.created_at,
    )


@documents_router.get("", response_model=DocumentListResponse)
@inject
async def list_documents(
    search: str | None = None,
    category: str | None = None,
    tags: str | None = Query(default=None, description="Comma-separated tags"),  # noqa: B008
    document_service: DocumentService = Depends(Provide[DIContainer.document_service]),  # noqa: B008
) -> DocumentListResponse:
    """List documents, newest first."""
    documents = await document_service.list_documents(
        search=search, category=category, tags=parse_tags(tags)
    )
    return DocumentListResponse(
        documents=[DocumentInfo.model_validate(doc) for doc in documents],
        total_count=len(documents),
    )


@documents_router.get("/search", response_model=DocumentSearchResponse)
@inject
async def search_documents(
    query: str = Query(..., min_length=1),  # noqa: B008
    limit: int = Query(default=5, ge=1, le=50),  # noqa: B008
    category: str | None = None,
    tags: str | None = Query(default=None, description="Comma-separated tags"),  # noqa: B008
    document_service: DocumentService = Depends(Provide[DIContainer.document_service]),  # noqa: B008
) -> DocumentSearchResponse:
    """Rank documents against a query with the keyword relevance score."""
    scored = await document_service.search_documents(
        query, limit=limit, category=category, tags=parse_tags(tags)
    )
    results = [
        DocumentSearchResult(
            **DocumentInfo.model_validate(item.document).model_dump(),
            relevance_score=item.score,
        )
        for item in scored
    ]
    return DocumentSearchResponse(query=query, results=results, total_count=len(results))


@documents_router.get("/categories", response_model=CategoriesResponse)
@inject
async def get_categories(
    document_service: DocumentService = Depends(Provide[DIContainer.document_service]),  # noqa: B008
) -> CategoriesResponse:
    """Categories currently in use."""
    return CategoriesResponse(categories=await document_service.get_categories())


@documents_router.get("/tags", response_model=TagsResponse)
@inject
async def get_tags(
    document_service: DocumentService = Depends(Provide[DIContainer.document_service]),  # noqa: B008
) -> TagsResponse:
    """Tags currently in use."""
    return TagsResponse(tags=await document_service.get_tags())


@documents_router.get("/{document_id}", response_model=DocumentDetail)
@inject
async def get_document(
    document_id: int,
    document_service: DocumentService = Depends(Provide[DIContainer.document_service]),  # noqa: B008
) -> DocumentDetail:
    """Get one document including its text."""
    document = await document_service.get_document(document_id)
    return DocumentDetail.model_validate(document)


@documents_router.patch("/{document_id}", response_model=DocumentDetail)
@inject
async def update_document(
    document_id: int,
    request: DocumentUpdateRequest,
    document_service: DocumentService = Depends(Provide[DIContainer.document_service]),  # noqa: B008
) -> DocumentDetail:
    """Edit title, category or tags."""
    document = await document_service.update_document(
        document_id,
        title=request.title,
        category=request.category,
        tags=request.tags,
    )
    return DocumentDetail.model_validate(document)


@documents_router.delete("/{document_id}", response_model=DocumentDeleteResponse)
@inject
async def delete_document(
    document_id: int,
    document_service: DocumentService = Depends(Provide[DIContainer.document_service]),  # noqa: B008
) -> DocumentDeleteResponse:
    """Delete a document and its stored file."""
    await document_service.delete_document(document_id)
    return DocumentDeleteResponse(id=document_id)


# === Health ===


@health_router.get("/health", response_model=HealthResponse)
@inject
async def health(
    config: AppConfig = Depends(Provide[DIContainer.config]),  # noqa: B008
) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC),
        llm_provider=config.llm.provider,
        store_backend=config.store.backend,
    )


router.include_router(chat_router)
router.include_router(documents_router)

"""Request and response schemas for the API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# --- Request Models ---


class ChatMessageRequest(BaseModel):
    """Chat message request schema."""

    message: str = Field(..., min_length=1, max_length=10000, description="User message")
    session_id: str = Field(..., min_length=1, description="Chat session ID (UUID)")


class DocumentUpdateRequest(BaseModel):
    """Partial document update. Omitted fields are left unchanged."""

    title: str | None = Field(default=None, max_length=255)
    category: str | None = None
    tags: list[str] | None = None


# --- Response Models ---


class SessionResponse(BaseModel):
    """Created chat session."""

    session_id: str
    created_at: datetime


class ChatSourceResponse(BaseModel):
    """Document cited by an answer."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    relevant_content: str
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    summary: str | None = None


class ChatMessageResponse(BaseModel):
    """Answer to a chat message."""

    response: str = Field(..., description="Assistant answer")
    sources: list[ChatSourceResponse] = Field(default_factory=list)
    session_id: str
    timestamp: datetime


class MessageResponse(BaseModel):
    """Stored chat message."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    role: str
    content: str
    sources: list[int] | None = None
    created_at: datetime


class ChatHistoryResponse(BaseModel):
    """Conversation history of one session."""

    messages: list[MessageResponse]
    session_id: str
    total_count: int


class DocumentUploadResponse(BaseModel):
    """Result of a processed upload."""

    id: int
    title: str
    file_type: str
    category: str
    tags: list[str]
    summary: str
    word_count: int
    status: str = "uploaded"
    message: str
    created_at: datetime


class DocumentInfo(BaseModel):
    """Document metadata without the full body."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    summary: str
    category: str
    tags: list[str]
    word_count: int
    file_type: str
    created_at: datetime
    updated_at: datetime


class DocumentDetail(DocumentInfo):
    """Document including its extracted text."""

    content: str


class DocumentListResponse(BaseModel):
    """List of documents."""

    documents: list[DocumentInfo]
    total_count: int


class DocumentSearchResult(DocumentInfo):
    """Document with its relevance score for a query."""

    relevance_score: float


class DocumentSearchResponse(BaseModel):
    """Ranked search results."""

    query: str
    results: list[DocumentSearchResult]
    total_count: int


class CategoriesResponse(BaseModel):
    categories: list[str]


class TagsResponse(BaseModel):
    tags: list[str]


class DocumentDeleteResponse(BaseModel):
    """Document deletion result."""

    id: int
    message: str = "Document deleted successfully"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    timestamp: datetime
    llm_provider: str = Field(..., description="Configured LLM provider")
    store_backend: str = Field(..., description="Configured persistence backend")

"""Common test fixtures."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from cto_coach.chat.service import ChatService
from cto_coach.core.config import AppConfig, LLMConfig, StoreConfig, UploadConfig
from cto_coach.core.di_container import container as di_container
from cto_coach.documents.extractor import FileContentExtractor
from cto_coach.documents.models import Document
from cto_coach.documents.service import DocumentService
from cto_coach.storage.in_memory import InMemoryStore


class MockLLM:
    """Mock LLM provider for testing.

    Records every prompt; raises ``error`` instead of answering when set.
    """

    provider_name = "mock"

    def __init__(self, response: str = "This is a mock response.", error: Exception | None = None):
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


def make_document(
    id: int = 1,
    title: str = "Untitled",
    content: str = "",
    summary: str = "",
    category: str = "General",
    tags: list[str] | None = None,
) -> Document:
    """Build a Document without going through a store."""
    now = datetime.now(UTC)
    return Document(
        id=id,
        title=title,
        content=content,
        summary=summary,
        category=category,
        tags=tags or [],
        word_count=len(content.split()),
        file_type="text/markdown",
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def test_config(tmp_path) -> AppConfig:
    """Create test configuration."""
    return AppConfig(
        debug=True,
        log_level="DEBUG",
        llm=LLMConfig(provider="openai", model="gpt-4o-mini", max_tokens=100),
        store=StoreConfig(backend="in_memory"),
        upload=UploadConfig(upload_dir=str(tmp_path / "uploads"), max_file_size=1024 * 1024),
    )


@pytest.fixture
def document_factory():
    """Factory for Documents that bypass the store."""
    return make_document


@pytest.fixture
def mock_llm() -> MockLLM:
    """Create mock LLM provider."""
    return MockLLM()


@pytest.fixture
def store() -> InMemoryStore:
    """Fresh in-memory store."""
    return InMemoryStore()


@pytest.fixture
def upload_dir(test_config: AppConfig):
    """Upload directory of the test configuration (not created yet)."""
    return Path(test_config.upload.upload_dir)


@pytest.fixture
def document_service(store: InMemoryStore, upload_dir) -> DocumentService:
    """Document service over the in-memory store."""
    return DocumentService(store=store, extractor=FileContentExtractor(), upload_dir=upload_dir)


@pytest.fixture
def chat_service(store: InMemoryStore, document_service: DocumentService, mock_llm: MockLLM) -> ChatService:
    """Chat service with a mock LLM."""
    return ChatService(store=store, document_service=document_service, llm=mock_llm)


@pytest.fixture
def override_container(test_config: AppConfig, mock_llm: MockLLM, store: InMemoryStore):
    """Point the DI container at test config, mock LLM and a fresh store."""
    di_container.reset_singletons()
    with (
        di_container.config.override(test_config),
        di_container.llm.override(mock_llm),
        di_container.store.override(store),
    ):
        yield di_container
    di_container.reset_singletons()

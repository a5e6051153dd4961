"""Integration tests for the API.

The DI container is overridden with the test config, a mock LLM and an
in-memory store, so no API keys or database are needed.
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from cto_coach.core.exceptions import LLMAuthenticationError, LLMQuotaExceededError
from cto_coach.main import create_app

GUIDE = (
    b"# Microservices Guide\n\n"
    b"Microservices let each team own a service. Scalability comes from independent deployment. "
    b"Every microservice exposes an API. Keep the architecture simple."
)


@pytest.fixture
def client(override_container):
    """Create test client with the lifespan running."""
    app = create_app()
    with TestClient(app) as client:
        yield client


def _upload(client, filename="microservices-guide.md", data=GUIDE, content_type="text/markdown"):
    return client.post("/api/documents/upload", files={"document": (filename, data, content_type)})


def _new_session(client) -> str:
    return client.post("/api/chat/session").json()["session_id"]


class TestHealthAPI:
    """Health and root endpoints."""

    def test_health_endpoint(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["llm_provider"] == "openai"
        assert data["store_backend"] == "in_memory"
        assert "timestamp" in data

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["health"] == "/health"

    def test_process_time_header(self, client):
        response = client.get("/api/documents")
        assert "x-process-time-ms" in response.headers


class TestChatAPI:
    """Chat sessions and messages."""

    def test_create_session(self, client):
        response = client.post("/api/chat/session")

        assert response.status_code == 201
        data = response.json()
        uuid.UUID(data["session_id"])
        assert "created_at" in data

    def test_message_flow(self, client, mock_llm):
        """Upload a guide, ask about it, then read the history back."""
        document_id = _upload(client).json()["id"]
        session_id = _new_session(client)

        response = client.post(
            "/api/chat/message",
            json={"message": "How do microservices scale?", "session_id": session_id},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["response"] == mock_llm.response
        assert data["session_id"] == session_id
        assert [source["id"] for source in data["sources"]] == [document_id]
        assert data["sources"][0]["title"] == "Microservices Guide"
        assert data["sources"][0]["relevant_content"]
        assert "Document 1: Microservices Guide" in mock_llm.prompts[0]

        history = client.get(f"/api/chat/history/{session_id}").json()
        assert history["total_count"] == 2
        assert [m["role"] for m in history["messages"]] == ["user", "assistant"]
        assert history["messages"][0]["content"] == "How do microservices scale?"
        assert history["messages"][1]["sources"] == [document_id]

    def test_blank_message(self, client):
        session_id = _new_session(client)
        response = client.post("/api/chat/message", json={"message": "   ", "session_id": session_id})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Message is required"

    def test_missing_message_field(self, client):
        response = client.post("/api/chat/message", json={"session_id": str(uuid.uuid4())})
        assert response.status_code == 422

    def test_unknown_session(self, client):
        response = client.post(
            "/api/chat/message", json={"message": "hello", "session_id": str(uuid.uuid4())}
        )
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_history_unknown_session(self, client):
        response = client.get(f"/api/chat/history/{uuid.uuid4()}")
        assert response.status_code == 404

    def test_history_malformed_session(self, client):
        response = client.get("/api/chat/history/not-a-uuid")
        assert response.status_code == 400

    @pytest.mark.parametrize(
        ("error", "status_code", "code"),
        [
            (LLMQuotaExceededError("openai"), 429, "LLM_QUOTA_EXCEEDED"),
            (LLMAuthenticationError("openai"), 401, "LLM_AUTH_ERROR"),
        ],
    )
    def test_llm_errors(self, client, mock_llm, error, status_code, code):
        """Typed LLM failures map to their status codes and store nothing."""
        mock_llm.error = error
        session_id = _new_session(client)

        response = client.post("/api/chat/message", json={"message": "hello", "session_id": session_id})

        assert response.status_code == status_code
        assert response.json()["error"]["code"] == code
        assert client.get(f"/api/chat/history/{session_id}").json()["total_count"] == 0


class TestDocumentsAPI:
    """Upload, list, search and manage documents."""

    def test_upload_markdown(self, client, upload_dir):
        response = _upload(client)

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Microservices Guide"
        assert data["category"] == "Architecture"
        assert "microservices" in data["tags"]
        assert data["file_type"] == "text/markdown"
        assert data["status"] == "uploaded"
        assert data["message"] == "Document processed successfully"
        assert len(list(upload_dir.iterdir())) == 1

    def test_upload_octet_stream_uses_extension(self, client):
        response = _upload(client, filename="notes.txt", data=b"Plain notes.", content_type="application/octet-stream")
        assert response.status_code == 201
        assert response.json()["file_type"] == "text/plain"

    def test_upload_unsupported_type(self, client, upload_dir):
        """An image is rejected and nothing is left in the upload directory."""
        response = _upload(client, filename="diagram.png", data=b"\x89PNG\r\n\x1a\n", content_type="image/png")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "UNSUPPORTED_FILE_TYPE"
        assert list(upload_dir.iterdir()) == []
        assert client.get("/api/documents").json()["total_count"] == 0

    def test_upload_empty_file(self, client):
        response = _upload(client, filename="blank.md", data=b"", content_type="text/markdown")

        assert response.status_code == 201
        assert response.json()["summary"] == "."
        assert response.json()["word_count"] == 0

    def test_upload_without_file(self, client):
        response = client.post("/api/documents/upload")
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "No file uploaded"

    def test_upload_invalid_pdf_header(self, client, upload_dir):
        response = _upload(client, filename="fake.pdf", data=b"not a pdf", content_type="application/pdf")
        assert response.status_code == 400
        assert list(upload_dir.iterdir()) == []

    def test_upload_too_large(self, client):
        response = _upload(client, filename="big.txt", data=b"x" * (1024 * 1024 + 1), content_type="text/plain")
        assert response.status_code == 400

    def test_list_and_filter(self, client):
        guide_id = _upload(client).json()["id"]
        _upload(client, filename="budget.txt", data=b"Budgets are planned every year by finance.", content_type="text/plain")

        listing = client.get("/api/documents").json()
        assert listing["total_count"] == 2
        assert "content" not in listing["documents"][0]

        filtered = client.get("/api/documents", params={"category": "Architecture"}).json()
        assert [doc["id"] for doc in filtered["documents"]] == [guide_id]

        by_tag = client.get("/api/documents", params={"tags": "scalability, nosql"}).json()
        assert [doc["id"] for doc in by_tag["documents"]] == [guide_id]

    def test_search(self, client):
        guide_id = _upload(client).json()["id"]
        _upload(client, filename="budget.txt", data=b"Budgets are planned every year by finance.", content_type="text/plain")

        response = client.get("/api/documents/search", params={"query": "microservices", "limit": 1})

        assert response.status_code == 200
        data = response.json()
        assert data["query"] == "microservices"
        assert data["total_count"] == 1
        assert data["results"][0]["id"] == guide_id
        assert data["results"][0]["relevance_score"] > 0

    def test_search_requires_query(self, client):
        assert client.get("/api/documents/search").status_code == 422

    def test_categories_and_tags(self, client):
        _upload(client)

        assert client.get("/api/documents/categories").json() == {"categories": ["Architecture"]}
        assert "microservices" in client.get("/api/documents/tags").json()["tags"]

    def test_get_update_delete(self, client, upload_dir):
        document_id = _upload(client).json()["id"]

        detail = client.get(f"/api/documents/{document_id}").json()
        assert detail["content"] == GUIDE.decode()

        patched = client.patch(
            f"/api/documents/{document_id}", json={"title": "Service Design", "tags": ["api", "api"]}
        )
        assert patched.status_code == 200
        assert patched.json()["title"] == "Service Design"
        assert patched.json()["tags"] == ["api"]

        deleted = client.delete(f"/api/documents/{document_id}")
        assert deleted.status_code == 200
        assert deleted.json() == {"id": document_id, "message": "Document deleted successfully"}
        assert list(upload_dir.iterdir()) == []
        assert client.get(f"/api/documents/{document_id}").status_code == 404

    def test_patch_unknown_category(self, client):
        document_id = _upload(client).json()["id"]
        response = client.patch(f"/api/documents/{document_id}", json={"category": "Gardening"})
        assert response.status_code == 400

    def test_missing_document(self, client):
        assert client.get("/api/documents/999").status_code == 404
        response = client.delete("/api/documents/999")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

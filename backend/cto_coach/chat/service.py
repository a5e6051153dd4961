"""Chat sessions and question answering."""

import time

from cto_coach.chat.models import ChatResult, ChatSession, ChatSource, Message
from cto_coach.core.exceptions import LLMError, NotFoundError, ValidationError
from cto_coach.core.logging import get_logger, log_request
from cto_coach.core.protocols import ChatStore, LLMProvider
from cto_coach.core.validators import validate_message_content, validate_session_id
from cto_coach.documents.scoring import extract_relevant_content
from cto_coach.documents.service import DocumentService
from cto_coach.graph.builder import build_chat_graph
from cto_coach.graph.state import create_initial_state

logger = get_logger(__name__)


class ChatService:
    """Runs chat turns through the retrieve → generate graph and persists them."""

    def __init__(self, store: ChatStore, document_service: DocumentService, llm: LLMProvider):
        self.store = store
        self.document_service = document_service
        self.graph = build_chat_graph(document_service, llm)

    async def create_session(self) -> ChatSession:
        session = await self.store.create_session()
        logger.info("chat_session_created", session_id=session.id)
        return session

    async def _require_session(self, session_id: str) -> ChatSession:
        is_valid, error = validate_session_id(session_id)
        if not is_valid:
            raise ValidationError(error or "Invalid session ID", field="session_id")

        session = await self.store.get_session(session_id)
        if session is None:
            raise NotFoundError("Chat session", session_id)
        return session

    async def process_message(self, message: str, session_id: str) -> ChatResult:
        """Answer one user message.

        Both messages are persisted only after generation succeeded, user
        message first.

        Raises:
            ValidationError: Blank or malformed message, malformed session id
            NotFoundError: Unknown session
            LLMError: Typed generation failure
        """
        is_valid, error = validate_message_content(message)
        if not is_valid:
            raise ValidationError(error or "Invalid message", field="message")
        await self._require_session(session_id)

        start = time.perf_counter()
        try:
            state = await self.graph.ainvoke(create_initial_state(message, session_id))
        except LLMError as e:
            log_request(
                "POST",
                "/api/chat/message",
                session_id=session_id,
                user_message=message,
                duration_ms=(time.perf_counter() - start) * 1000,
                status="error",
                error=e.message,
            )
            raise

        answer = state["answer"]
        documents = [scored.document for scored in state.get("documents", [])]

        await self.store.add_message(session_id, "user", message)
        await self.store.add_message(session_id, "assistant", answer, sources=[doc.id for doc in documents])

        sources = [
            ChatSource(
                id=doc.id,
                title=doc.title,
                relevant_content=extract_relevant_content(doc.content, message),
                category=doc.category,
                tags=list(doc.tags),
                summary=doc.summary,
            )
            for doc in documents
        ]

        log_request(
            "POST",
            "/api/chat/message",
            session_id=session_id,
            user_message=message,
            document_count=len(documents),
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        return ChatResult(answer=answer, sources=sources)

    async def get_history(self, session_id: str) -> list[Message]:
        """Messages of a session in creation order.

        Raises:
            NotFoundError: Unknown session
        """
        await self._require_session(session_id)
        return await self.store.list_messages(session_id)

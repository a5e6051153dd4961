"""Chat pipeline state definition for LangGraph."""

from typing import TypedDict

from cto_coach.documents.models import ScoredDocument


class ChatState(TypedDict, total=False):
    """State passed between the retrieve and generate nodes.

    Attributes:
        question: The user's message, verbatim
        session_id: Chat session the turn belongs to
        documents: Ranked documents retrieved for the question
        prompt: Assembled prompt sent to the LLM
        answer: Completion text, unmodified
    """

    question: str
    session_id: str
    documents: list[ScoredDocument]
    prompt: str
    answer: str


def create_initial_state(question: str, session_id: str) -> ChatState:
    """Create the state for one chat turn."""
    return {
        "question": question,
        "session_id": session_id,
        "documents": [],
    }

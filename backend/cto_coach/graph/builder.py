"""LangGraph graph builder."""

from langgraph.graph import END, StateGraph

from cto_coach.chat.prompt import build_prompt
from cto_coach.core.logging import get_logger
from cto_coach.core.protocols import LLMProvider
from cto_coach.documents.service import DocumentService
from cto_coach.graph.state import ChatState

logger = get_logger(__name__)


def build_chat_graph(document_service: DocumentService, llm: LLMProvider):
    """Build and compile the chat pipeline.

    Graph flow:
    START → retrieve → generate → END

    ``retrieve`` never fails (search errors degrade to no documents);
    ``generate`` raises typed LLM errors straight out of ``ainvoke``.

    Args:
        document_service: Source of ranked documents
        llm: Generation backend

    Returns:
        Compiled LangGraph
    """

    async def retrieve(state: ChatState) -> dict:
        documents = await document_service.search_documents(state["question"])
        logger.debug(
            "documents_retrieved",
            session_id=state.get("session_id"),
            count=len(documents),
        )
        return {"documents": documents}

    async def generate(state: ChatState) -> dict:
        documents = [scored.document for scored in state.get("documents", [])]
        prompt = build_prompt(state["question"], documents)
        answer = await llm.generate(prompt)
        return {"prompt": prompt, "answer": answer}

    graph = StateGraph(ChatState)
    graph.add_node("retrieve", retrieve)
    graph.add_node("generate", generate)
    graph.set_entry_point("retrieve")
    graph.add_edge("retrieve", "generate")
    graph.add_edge("generate", END)

    compiled = graph.compile()
    logger.info("chat_graph_compiled", nodes=["retrieve", "generate"])
    return compiled

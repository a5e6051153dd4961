"""Chat pipeline graph."""

from cto_coach.graph.builder import build_chat_graph
from cto_coach.graph.state import ChatState, create_initial_state

__all__ = ["ChatState", "build_chat_graph", "create_initial_state"]

"""LLM abstraction layer - providers and factory."""

# Import providers first to trigger registration via decorators
from cto_coach.llm import anthropic_provider, google_provider, ollama_provider, openai_provider
from cto_coach.llm.factory import LLMFactory

__all__ = [
    "LLMFactory",
    "anthropic_provider",
    "google_provider",
    "ollama_provider",
    "openai_provider",
]

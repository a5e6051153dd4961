"""Local models served by Ollama."""

from langchain_ollama import ChatOllama

from cto_coach.core.config import LLMConfig
from cto_coach.llm.base import LangChainProvider
from cto_coach.llm.factory import LLMFactory

DEFAULT_OLLAMA_URL = "http://localhost:11434"


@LLMFactory.register("ollama")
class OllamaProvider(LangChainProvider):
    """No API key; ``LLM_BASE_URL`` defaults to the local daemon."""

    provider_name = "ollama"

    def _build_client(self, config: LLMConfig) -> ChatOllama:
        return ChatOllama(
            model=config.model,
            base_url=config.base_url or DEFAULT_OLLAMA_URL,
            temperature=config.temperature,
            num_predict=config.max_tokens,
        )

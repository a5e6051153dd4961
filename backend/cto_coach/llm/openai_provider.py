"""OpenAI chat models, or any OpenAI-compatible endpoint."""

from langchain_openai import ChatOpenAI

from cto_coach.core.config import LLMConfig
from cto_coach.llm.base import LangChainProvider
from cto_coach.llm.factory import LLMFactory


@LLMFactory.register("openai")
class OpenAIProvider(LangChainProvider):
    """``LLM_BASE_URL`` points the client at a compatible server."""

    provider_name = "openai"

    def _build_client(self, config: LLMConfig) -> ChatOpenAI:
        extra = {"base_url": config.base_url} if config.base_url else {}
        return ChatOpenAI(
            model=config.model,
            api_key=self.require_key(config.openai_api_key, "LLM_OPENAI_API_KEY"),
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            **extra,
        )

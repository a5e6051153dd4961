"""Anthropic Claude models."""

from langchain_anthropic import ChatAnthropic

from cto_coach.core.config import LLMConfig
from cto_coach.llm.base import LangChainProvider
from cto_coach.llm.factory import LLMFactory


@LLMFactory.register("anthropic")
class AnthropicProvider(LangChainProvider):
    provider_name = "anthropic"

    def _build_client(self, config: LLMConfig) -> ChatAnthropic:
        extra = {"base_url": config.base_url} if config.base_url else {}
        return ChatAnthropic(
            model=config.model,
            api_key=self.require_key(config.anthropic_api_key, "LLM_ANTHROPIC_API_KEY"),
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            **extra,
        )

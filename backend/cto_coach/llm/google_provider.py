"""Google Gemini models, the default provider."""

from langchain_google_genai import ChatGoogleGenerativeAI

from cto_coach.core.config import LLMConfig
from cto_coach.llm.base import LangChainProvider
from cto_coach.llm.factory import LLMFactory


@LLMFactory.register("google")
class GoogleProvider(LangChainProvider):
    """Gemini via langchain-google-genai.

    The key is read from ``GEMINI_API_KEY`` (or ``LLM_GOOGLE_API_KEY``).
    """

    provider_name = "google"

    def _build_client(self, config: LLMConfig) -> ChatGoogleGenerativeAI:
        return ChatGoogleGenerativeAI(
            model=config.model,
            google_api_key=self.require_key(config.google_api_key, "GEMINI_API_KEY"),
            temperature=config.temperature,
            max_output_tokens=config.max_tokens,
        )

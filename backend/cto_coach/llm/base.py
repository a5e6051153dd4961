"""Shared generation logic for LangChain chat model providers."""

from typing import Any

from cto_coach.core.config import LLMConfig
from cto_coach.core.exceptions import (
    ConfigurationError,
    ContentFilteredError,
    GenerationError,
    LLMAuthenticationError,
    LLMError,
    LLMQuotaExceededError,
)
from cto_coach.core.logging import get_logger

logger = get_logger(__name__)

# (substring of the lower-cased provider error, typed error)
ERROR_MARKERS: tuple[tuple[str, type[LLMError]], ...] = (
    ("api key", LLMAuthenticationError),
    ("quota", LLMQuotaExceededError),
    ("safety", ContentFilteredError),
)


def classify_llm_error(error: Exception, provider: str) -> LLMError:
    """Map a provider exception onto the typed LLM error family.

    Examples:
        >>> type(classify_llm_error(Exception("API key not valid"), "google")).__name__
        'LLMAuthenticationError'
    """
    message = str(error).lower()
    for marker, error_cls in ERROR_MARKERS:
        if marker in message:
            return error_cls(provider)
    return GenerationError(provider)


def response_text(content: Any) -> str:
    """Flatten a chat model response body into plain text.

    Some providers return a list of content blocks instead of a string.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return ""


class LangChainProvider:
    """Base class for providers wrapping a LangChain chat model.

    Subclasses set ``provider_name`` and implement ``_build_client``.
    """

    provider_name: str = "llm"
    client: Any

    def __init__(self, config: LLMConfig):
        self.config = config
        self.client = self._build_client(config)
        logger.info("llm_provider_initialized", provider=self.provider_name, model=config.model)

    def _build_client(self, config: LLMConfig) -> Any:
        raise NotImplementedError

    @staticmethod
    def require_key(value: str | None, env_var: str) -> str:
        """Return an API key or fail with the variable that should hold it."""
        if not value:
            raise ConfigurationError(f"{env_var} environment variable is required")
        return value

    async def generate(self, prompt: str) -> str:
        """Send one prompt and return the completion text unmodified.

        Raises:
            LLMError: Typed by the provider error message; empty completions
                raise GenerationError.
        """
        try:
            response = await self.client.ainvoke(prompt)
        except Exception as e:
            logger.error("generation_failed", provider=self.provider_name, error=str(e))
            raise classify_llm_error(e, self.provider_name) from e

        text = response_text(response.content)
        if not text.strip():
            logger.error("empty_generation", provider=self.provider_name)
            raise GenerationError(self.provider_name, f"Empty response from {self.provider_name} API")
        return text

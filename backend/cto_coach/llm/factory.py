"""LLM provider factory with decorator-based registration."""

from cto_coach.core.config import LLMConfig
from cto_coach.core.exceptions import ConfigurationError
from cto_coach.core.logging import get_logger
from cto_coach.core.protocols import LLMProvider

logger = get_logger(__name__)


class LLMFactory:
    """Registry of generation backends keyed by ``LLM_PROVIDER``.

    New backends live in their own module under ``cto_coach.llm`` and apply
    ``@LLMFactory.register("name")``; the package ``__init__`` imports them.
    """

    _registry: dict[str, type] = {}

    @classmethod
    def register(cls, name: str):
        """Decorator to register a provider class."""

        def decorator(provider_cls: type) -> type:
            cls._registry[name] = provider_cls
            return provider_cls

        return decorator

    @classmethod
    def create(cls, config: LLMConfig) -> LLMProvider:
        """Build the configured provider.

        Raises:
            ConfigurationError: Unknown provider name or missing credentials
        """
        name = config.provider.lower()
        provider_cls = cls._registry.get(name)
        if provider_cls is None:
            available = ", ".join(sorted(cls._registry)) or "none registered"
            raise ConfigurationError(f"Unknown LLM provider: '{config.provider}'. Available: {available}")

        logger.info("llm_provider_selected", provider=name, model=config.model)
        return provider_cls(config)

    @classmethod
    def available_providers(cls) -> list[str]:
        """List all registered providers."""
        return sorted(cls._registry)

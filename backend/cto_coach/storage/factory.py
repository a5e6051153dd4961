"""Factory for creating persistence backends."""

from cto_coach.core.config import StoreConfig


class StoreFactory:
    """Factory for creating store instances using registry pattern.

    A registered backend implements both ``DocumentStore`` and ``ChatStore``.
    """

    _registry: dict[str, type] = {}

    @classmethod
    def register(cls, backend: str):
        """Decorator to register a store implementation.

        Usage:
            @StoreFactory.register("sql")
            class SqlStore:
                ...
        """

        def decorator(store_cls: type) -> type:
            cls._registry[backend] = store_cls
            return store_cls

        return decorator

    @classmethod
    def create(cls, config: StoreConfig):
        """Create a store from configuration.

        Raises:
            ValueError: If backend is not registered
        """
        store_cls = cls._registry.get(config.backend)
        if store_cls is None:
            raise ValueError(
                f"Unknown store backend: {config.backend}. Available: {list(cls._registry.keys())}"
            )

        if config.backend == "sql":
            return store_cls(config.database_url, echo=config.echo)
        return store_cls()

    @classmethod
    def available_backends(cls) -> list[str]:
        """Get list of available backend names."""
        return list(cls._registry.keys())

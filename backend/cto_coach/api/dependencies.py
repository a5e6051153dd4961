"""FastAPI dependencies for DI."""

from functools import lru_cache

from cto_coach.core.config import AppConfig, get_config
from cto_coach.core.di_container import DIContainer
from cto_coach.core.di_container import container as di_container


@lru_cache
def get_cached_config() -> AppConfig:
    """Get cached application config."""
    return get_config()


def get_container_dependency() -> DIContainer:
    """Get the global DI container.

    Tests override its providers instead of replacing the container.
    """
    return di_container

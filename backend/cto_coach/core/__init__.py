"""Core infrastructure - config, DI container, protocols, exceptions."""

from cto_coach.core.config import AppConfig, LLMConfig, SearchConfig, StoreConfig, UploadConfig
from cto_coach.core.exceptions import (
    AppError,
    ConfigurationError,
    LLMError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "AppConfig",
    "LLMConfig",
    "SearchConfig",
    "StoreConfig",
    "UploadConfig",
    "AppError",
    "ConfigurationError",
    "LLMError",
    "NotFoundError",
    "ValidationError",
]

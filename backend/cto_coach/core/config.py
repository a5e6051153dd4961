"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent.parent
_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)


class LLMConfig(BaseSettings):
    """LLM provider configuration."""

    provider: str = "google"
    model: str = "gemini-1.5-flash"
    temperature: float = 0.7
    max_tokens: int = 2048
    base_url: str | None = None

    # API keys (used based on provider)
    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LLM_GOOGLE_API_KEY", "GEMINI_API_KEY", "google_api_key"),
    )
    openai_api_key: str | None = None
    anthropic_api_key: str | None = None

    model_config = SettingsConfigDict(env_prefix="LLM_", populate_by_name=True)


class StoreConfig(BaseSettings):
    """Persistence backend configuration."""

    backend: str = "in_memory"  # 'in_memory' or 'sql'
    database_url: str = "sqlite+aiosqlite:///./cto_coach.db"
    echo: bool = False

    model_config = SettingsConfigDict(env_prefix="STORE_")


class UploadConfig(BaseSettings):
    """File upload configuration."""

    upload_dir: str = "uploads"
    max_file_size: int = 10 * 1024 * 1024

    model_config = SettingsConfigDict(env_prefix="UPLOAD_")


class SearchConfig(BaseSettings):
    """Keyword relevance scoring configuration.

    The weights are heuristic, not calibrated against any relevance data.
    """

    top_k: int = 5
    title_weight: float = 10.0
    summary_weight: float = 8.0
    content_weight: float = 2.0
    tag_weight: float = 5.0
    category_weight: float = 3.0

    model_config = SettingsConfigDict(env_prefix="SEARCH_")


class AppConfig(BaseSettings):
    """Top-level application configuration."""

    app_name: str = "CTO Coach"
    debug: bool = False
    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list = Field(default_factory=lambda: ["*"])

    llm: LLMConfig = Field(default_factory=LLMConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)

    model_config = SettingsConfigDict(env_file=str(_env_file), env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    anthropic_api_key: str | None = Field(None, alias="ANTHROPIC_API_KEY")
    llm_base_url: str = Field("https://api.anthropic.com", alias="LLM_BASE_URL")
    llm_model_name: str = Field("claude-sonnet-4-20250514", alias="LLM_MODEL_NAME")
    llm_max_tokens: int = Field(2000, alias="LLM_MAX_TOKENS")
    llm_timeout_seconds: float = Field(15.0, alias="LLM_TIMEOUT_SECONDS")
    fetch_timeout_seconds: float = Field(10.0, alias="FETCH_TIMEOUT_SECONDS")
    scraper_user_agent: str = Field(
        "Mozilla/5.0 (compatible; Tavola Recipe Importer/1.0)",
        alias="SCRAPER_USER_AGENT",
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings

from typing import Optional

from tavola_recipes.app.core.config import get_settings
from tavola_recipes.app.services.llm_client import AnthropicCompletionClient, CompletionClient


def get_completion_client() -> Optional[CompletionClient]:
    """LLM client for the extraction fallback, or None when no API key is configured."""
    settings = get_settings()
    if not settings.anthropic_api_key:
        return None
    return AnthropicCompletionClient(
        api_key=settings.anthropic_api_key,
        model=settings.llm_model_name,
        base_url=settings.llm_base_url,
        max_tokens=settings.llm_max_tokens,
        timeout_seconds=settings.llm_timeout_seconds,
    )

import logging
from typing import Optional, Protocol

import httpx

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"


class LLMServiceError(Exception):
    """The language-model service failed or replied with something unusable."""


class CompletionClient(Protocol):
    async def complete(self, prompt: str) -> str: ...


class AnthropicCompletionClient:
    """Single-turn chat completion over the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://api.anthropic.com",
        max_tokens: int = 2000,
        timeout_seconds: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def complete(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }
        timeout = httpx.Timeout(self.timeout_seconds, connect=min(self.timeout_seconds, 5.0))
        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            response = await client.post(f"{self.base_url}/v1/messages", json=payload, headers=headers)

        if response.status_code >= 400:
            logger.error(
                "LLM service returned status %s: %s", response.status_code, response.text[:500]
            )
            raise LLMServiceError(f"LLM service returned status {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise LLMServiceError("LLM service response was not JSON") from exc

        if isinstance(data, dict) and data.get("type") == "error":
            error_info = data.get("error") or {}
            raise LLMServiceError(
                f"LLM service error ({error_info.get('type', 'unknown_error')}): "
                f"{error_info.get('message', 'Unknown error')}"
            )

        content = None
        if isinstance(data, dict):
            blocks = data.get("content")
            if isinstance(blocks, list) and blocks and isinstance(blocks[0], dict):
                content = blocks[0].get("text")
        if not content or not isinstance(content, str):
            raise LLMServiceError("LLM response missing assistant content")
        return content

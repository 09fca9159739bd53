"""HTML fetching and URL validation utilities."""

import ipaddress
import logging
from urllib.parse import urlparse

import httpx

from tavola_recipes.app.core.config import get_settings

logger = logging.getLogger(__name__)


class InvalidUrlError(ValueError):
    """The URL or the page it serves cannot be imported."""


def is_private_host(host: str) -> bool:
    """Check if a host is private/localhost."""
    hostname = host.split(":")[0]
    try:
        ip = ipaddress.ip_address(hostname)
        return ip.is_private or ip.is_loopback
    except ValueError:
        return hostname.lower() in {"localhost"}


def validate_url(url: str) -> None:
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise InvalidUrlError("URL must start with http or https.")
    if is_private_host(parsed.hostname or ""):
        raise InvalidUrlError("URL points to a private or disallowed host")


async def fetch_html(url: str, timeout: float = 10.0) -> str:
    """Fetch a page's HTML. Raises InvalidUrlError for bad input, httpx.HTTPError for transport failures."""
    validate_url(url)
    settings = get_settings()
    headers = {
        "User-Agent": settings.scraper_user_agent,
        "Accept": "text/html,application/xhtml+xml",
        "Accept-Language": "en-US,en;q=0.9",
    }
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(timeout), follow_redirects=True, headers=headers
    ) as client:
        response = await client.get(url)
    response.raise_for_status()

    content_type = response.headers.get("content-type", "")
    if content_type and "html" not in content_type and "text/plain" not in content_type:
        raise InvalidUrlError(f"Unsupported content type: {content_type}")

    logger.info("Fetched %s (%d bytes, %s)", url, len(response.content), content_type or "unknown")
    return response.text

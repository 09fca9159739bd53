"""LLM-based recipe extraction, the last resort of the cascade."""

import json
import logging
import re
from typing import Any, Optional

import httpx
from bs4 import BeautifulSoup, Comment

from tavola_recipes.app.services.llm_client import CompletionClient, LLMServiceError
from tavola_recipes.app.services.url_parsing.constants import LLM_EXCERPT_CHARS
from tavola_recipes.app.services.url_parsing.models import RecipeCandidate
from tavola_recipes.app.services.url_parsing.parsing_utils import (
    clean_text,
    coerce_text_list,
    extract_instruction_text,
    parse_duration,
    parse_servings,
)

logger = logging.getLogger(__name__)

_NON_TEXT_TAGS = {"script", "style", "noscript", "template"}

PROMPT_TEMPLATE = (
    "Extract recipe data from this webpage text. Return ONLY valid JSON with these fields: "
    "name, description, ingredients (array of strings), instructions (array of strings), "
    "prepTime (minutes or null), cookTime (minutes or null), servings (number or null), "
    'cuisine, category. If you cannot find a recipe, return {{"error": "no recipe found"}}.'
    "\n\nURL: {url}\n\nPage text:\n{text}"
)


def build_page_excerpt(soup: BeautifulSoup, limit: int = LLM_EXCERPT_CHARS) -> str:
    """Visible body text, whitespace-collapsed and truncated to bound token cost."""
    root = soup.body or soup
    chunks = [
        str(s)
        for s in root.find_all(string=True)
        if not isinstance(s, Comment) and not (s.parent and s.parent.name in _NON_TEXT_TAGS)
    ]
    text = re.sub(r"\s+", " ", " ".join(chunks)).strip()
    return text[:limit]


def find_json_object(text: str) -> Optional[str]:
    """Return the first balanced ``{...}`` span in ``text``, ignoring braces inside strings."""
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for pos in range(start, len(text)):
            ch = text[pos]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
            elif ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start : pos + 1]
        start = text.find("{", start + 1)
    return None


def _candidate_from_reply(parsed: dict) -> RecipeCandidate:
    prep_time = parse_duration(parsed.get("prepTime"))
    cook_time = parse_duration(parsed.get("cookTime"))
    total_time = prep_time + cook_time if prep_time and cook_time else None
    return RecipeCandidate(
        name=clean_text(parsed.get("name")),
        description=clean_text(parsed.get("description")),
        ingredients=coerce_text_list(parsed.get("ingredients")),
        instructions=extract_instruction_text(parsed.get("instructions")),
        prep_time=prep_time,
        cook_time=cook_time,
        total_time=total_time,
        servings=parse_servings(parsed.get("servings")),
        image="",
        cuisine=clean_text(parsed.get("cuisine")),
        category=clean_text(parsed.get("category")),
    )


def parse_llm_reply(content: str) -> Optional[RecipeCandidate]:
    """Turn the raw model reply into a candidate, or None if it holds no recipe."""
    snippet = find_json_object(content or "")
    if snippet is None:
        logger.warning("LLM reply contained no JSON object: %s", (content or "")[:200])
        return None
    try:
        parsed: Any = json.loads(snippet)
    except json.JSONDecodeError as exc:
        logger.warning("LLM reply JSON failed to parse: %s", exc)
        return None
    if not isinstance(parsed, dict):
        return None
    if parsed.get("error"):
        logger.info("LLM reported no recipe: %s", parsed.get("error"))
        return None

    try:
        candidate = _candidate_from_reply(parsed)
    except (ValueError, OverflowError, TypeError) as exc:
        logger.warning("LLM reply fields could not be mapped: %s", exc)
        return None
    if not candidate.is_usable():
        logger.warning("LLM reply had no usable recipe content")
        return None
    return candidate


async def extract_recipe_via_llm(
    soup: BeautifulSoup, url: str, llm: CompletionClient
) -> Optional[RecipeCandidate]:
    """Ask the language model to pull a recipe out of the page text.

    Any failure (transport error, timeout, bad reply) is reported as None;
    this is the final stage, so there is nothing further to fall back to.
    """
    excerpt = build_page_excerpt(soup)
    prompt = PROMPT_TEMPLATE.format(url=url, text=excerpt)
    logger.info("Sending %d chars of page text to LLM for url=%s", len(excerpt), url)

    try:
        content = await llm.complete(prompt)
    except httpx.TimeoutException:
        logger.exception("LLM extraction timed out for %s", url)
        return None
    except (httpx.HTTPError, LLMServiceError):
        logger.exception("LLM extraction failed for %s", url)
        return None

    logger.debug("LLM raw content (truncated) for url=%s: %s", url, content[:1000])
    return parse_llm_reply(content)

import logging
from datetime import datetime, timezone
from typing import List, Optional

from bs4 import BeautifulSoup

from tavola_recipes.app.schemas.recipe import Recipe
from tavola_recipes.app.services.llm_client import CompletionClient
from tavola_recipes.app.services.url_parsing.constants import PLACEHOLDER_RECIPE_NAME
from tavola_recipes.app.services.url_parsing.extractors import (
    extract_recipe_from_microdata,
    extract_recipe_from_schema_org,
    extract_recipe_heuristic,
    extract_recipe_via_llm,
)
from tavola_recipes.app.services.url_parsing.html_fetcher import fetch_html
from tavola_recipes.app.services.url_parsing.models import ExtractionResult, RecipeCandidate
from tavola_recipes.app.services.url_parsing.parsing_utils import clean_text

logger = logging.getLogger(__name__)


class RecipeNotFoundError(Exception):
    """No extraction strategy produced a usable recipe for the page."""

    def __init__(self, source_url: str):
        super().__init__(f"Could not extract a recipe from {source_url}")
        self.source_url = source_url


async def run_extraction_cascade(
    soup: BeautifulSoup, url: str, llm: Optional[CompletionClient] = None
) -> ExtractionResult:
    """Try each strategy in order of reliability and stop at the first candidate.

    The language model is only consulted when every deterministic strategy
    has failed and a client was supplied.
    """
    candidate = extract_recipe_from_schema_org(soup)
    if candidate is not None:
        return ExtractionResult(found=True, candidate=candidate, parser_strategy="schema_org_json_ld")

    candidate = extract_recipe_from_microdata(soup)
    if candidate is not None:
        return ExtractionResult(found=True, candidate=candidate, parser_strategy="microdata")

    candidate = extract_recipe_heuristic(soup)
    if candidate is not None:
        return ExtractionResult(found=True, candidate=candidate, parser_strategy="heuristic")

    if llm is None:
        logger.info("Deterministic extraction failed for %s and no LLM is configured", url)
        return ExtractionResult(found=False)

    candidate = await extract_recipe_via_llm(soup, url, llm)
    if candidate is not None:
        return ExtractionResult(
            found=True, candidate=candidate, parser_strategy="llm_fallback", used_llm=True
        )
    return ExtractionResult(found=False, parser_strategy="llm_fallback", used_llm=True)


def _clean_lines(lines: List[str]) -> List[str]:
    return [line for line in (clean_text(item) for item in lines) if line]


def normalize_candidate(
    candidate: RecipeCandidate, source_url: str, imported_at: Optional[datetime] = None
) -> Recipe:
    total_time = candidate.total_time
    if total_time is None and candidate.prep_time is not None and candidate.cook_time is not None:
        total_time = candidate.prep_time + candidate.cook_time

    return Recipe(
        name=clean_text(candidate.name) or PLACEHOLDER_RECIPE_NAME,
        description=clean_text(candidate.description),
        ingredients=_clean_lines(candidate.ingredients),
        instructions=_clean_lines(candidate.instructions),
        prep_time=candidate.prep_time,
        cook_time=candidate.cook_time,
        total_time=total_time,
        servings=candidate.servings,
        image=(candidate.image or "").strip(),
        cuisine=clean_text(candidate.cuisine),
        category=clean_text(candidate.category),
        calories=candidate.calories,
        source_url=source_url,
        imported_at=imported_at or datetime.now(timezone.utc),
    )


async def extract_recipe(
    soup: BeautifulSoup, source_url: str, llm: Optional[CompletionClient] = None
) -> Recipe:
    result = await run_extraction_cascade(soup, source_url, llm)
    if not result.found or result.candidate is None:
        logger.warning("All extraction strategies failed for %s", source_url)
        raise RecipeNotFoundError(source_url)
    logger.info("Recipe extracted from %s via %s", source_url, result.parser_strategy)
    return normalize_candidate(result.candidate, source_url)


async def import_recipe_from_url(
    url: str, llm: Optional[CompletionClient] = None, timeout: float = 10.0
) -> Recipe:
    """Fetch a page and extract its recipe.

    Fetch failures propagate as ``InvalidUrlError`` / ``httpx.HTTPError``; an
    unextractable page raises ``RecipeNotFoundError``.
    """
    html = await fetch_html(url, timeout=timeout)
    soup = BeautifulSoup(html, "lxml")
    return await extract_recipe(soup, url, llm)

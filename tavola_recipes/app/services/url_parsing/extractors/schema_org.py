"""Schema.org JSON-LD recipe extraction."""

import json
import logging
from typing import Any, Iterator, Optional

from bs4 import BeautifulSoup

from tavola_recipes.app.services.url_parsing.constants import JSON_LD_MEDIA_TYPE
from tavola_recipes.app.services.url_parsing.models import RecipeCandidate
from tavola_recipes.app.services.url_parsing.parsing_utils import (
    clean_text,
    coerce_text_list,
    extract_instruction_text,
    first_of,
    join_list,
    parse_calories,
    parse_duration,
    parse_image,
    parse_servings,
)

logger = logging.getLogger(__name__)


def _is_recipe(obj: dict) -> bool:
    obj_type = obj.get("@type")
    if not obj_type:
        return False
    types = [obj_type] if isinstance(obj_type, str) else obj_type
    if not isinstance(types, list):
        return False
    return any(str(t).lower() == "recipe" for t in types)


def iter_recipe_nodes(data: Any) -> Iterator[dict]:
    """Yield Recipe-typed objects from a decoded JSON-LD block, in document order.

    Handles a bare Recipe object, a ``@graph`` wrapper and a top-level array.
    """
    if isinstance(data, list):
        for item in data:
            yield from iter_recipe_nodes(item)
    elif isinstance(data, dict):
        if _is_recipe(data):
            yield data
        graph = data.get("@graph")
        if isinstance(graph, list):
            yield from iter_recipe_nodes(graph)


def candidate_from_schema_recipe(obj: dict) -> RecipeCandidate:
    """Map one schema.org Recipe object onto a RecipeCandidate."""
    raw_ingredients = obj.get("recipeIngredient")
    if raw_ingredients is None:
        raw_ingredients = obj.get("ingredients")

    return RecipeCandidate(
        name=clean_text(obj.get("name")),
        description=clean_text(obj.get("description")),
        ingredients=coerce_text_list(raw_ingredients),
        instructions=extract_instruction_text(obj.get("recipeInstructions")),
        prep_time=parse_duration(obj.get("prepTime")),
        cook_time=parse_duration(obj.get("cookTime")),
        total_time=parse_duration(obj.get("totalTime")),
        servings=parse_servings(obj.get("recipeYield")),
        image=parse_image(obj.get("image")),
        cuisine=join_list(obj.get("recipeCuisine")),
        category=clean_text(first_of(obj.get("recipeCategory"))),
        calories=parse_calories(obj.get("nutrition")),
    )


def extract_recipe_from_schema_org(soup: BeautifulSoup) -> Optional[RecipeCandidate]:
    """Extract a recipe from schema.org JSON-LD blocks embedded in the page."""
    scripts = soup.find_all("script", attrs={"type": JSON_LD_MEDIA_TYPE})
    logger.info("Found %d JSON-LD script blocks", len(scripts))

    for idx, script in enumerate(scripts):
        raw_json = script.string or script.get_text()
        if not raw_json or not raw_json.strip():
            logger.debug("JSON-LD block %d is empty", idx)
            continue
        try:
            data = json.loads(raw_json)
        except json.JSONDecodeError as exc:
            logger.warning(
                "JSON-LD block %d failed to parse: %s (first 200 chars: %s)",
                idx,
                exc,
                raw_json[:200],
            )
            continue

        for obj in iter_recipe_nodes(data):
            candidate = candidate_from_schema_recipe(obj)
            logger.info(
                "JSON-LD block %d recipe: name=%s, ingredients=%d, instructions=%d",
                idx,
                candidate.name[:50] or "None",
                len(candidate.ingredients),
                len(candidate.instructions),
            )
            if candidate.is_usable():
                return candidate
            logger.warning("JSON-LD block %d recipe has no usable content, skipping", idx)
    return None

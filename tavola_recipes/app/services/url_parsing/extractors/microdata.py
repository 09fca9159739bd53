"""Schema.org microdata (itemscope/itemprop) recipe extraction."""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from tavola_recipes.app.services.url_parsing.constants import MICRODATA_RECIPE_TYPE_RE
from tavola_recipes.app.services.url_parsing.models import RecipeCandidate
from tavola_recipes.app.services.url_parsing.parsing_utils import (
    clean_text,
    parse_duration,
    parse_servings,
)

logger = logging.getLogger(__name__)


def _owner(el: Tag) -> Optional[Tag]:
    """Nearest enclosing element that starts an item scope."""
    for parent in el.parents:
        if parent.has_attr("itemscope") or parent.has_attr("itemtype"):
            return parent
    return None


def _props(root: Tag, name: str) -> List[Tag]:
    """Elements carrying itemprop ``name`` that belong to ``root`` itself, not a nested item."""
    return [el for el in root.select(f'[itemprop~="{name}"]') if _owner(el) is root]


def _first_prop(root: Tag, name: str) -> Optional[Tag]:
    found = _props(root, name)
    return found[0] if found else None


def _prop_text(root: Tag, name: str) -> str:
    el = _first_prop(root, name)
    if el is None:
        return ""
    if el.name == "meta":
        return clean_text(el.get("content"))
    return clean_text(el.get_text(" ", strip=True))


def _prop_value(root: Tag, name: str, attrs=("content", "datetime")) -> str:
    """Attribute value in preference to text content, as used for times and yields."""
    el = _first_prop(root, name)
    if el is None:
        return ""
    for attr in attrs:
        value = el.get(attr)
        if value:
            return clean_text(value)
    return clean_text(el.get_text(" ", strip=True))


def _instructions(root: Tag) -> List[str]:
    nested = root.select(
        '[itemprop~="recipeInstructions"] [itemprop~="text"], [itemprop~="step"] [itemprop~="text"]'
    )
    steps = [clean_text(el.get_text(" ", strip=True)) for el in nested]
    if not steps:
        for block in _props(root, "recipeInstructions"):
            items = block.find_all("li")
            if items:
                steps.extend(clean_text(li.get_text(" ", strip=True)) for li in items)
            else:
                steps.append(clean_text(block.get_text(" ", strip=True)))
    return [s for s in steps if s]


def _image(root: Tag) -> str:
    el = _first_prop(root, "image")
    if el is None:
        return ""
    for attr in ("src", "content", "href"):
        value = el.get(attr)
        if value:
            return value.strip()
    # ImageObject item: the URL sits on its own url property
    url_el = el.select_one('[itemprop~="url"]')
    if url_el is not None:
        for attr in ("content", "src", "href"):
            value = url_el.get(attr)
            if value:
                return value.strip()
    return ""


def extract_recipe_from_microdata(soup: BeautifulSoup) -> Optional[RecipeCandidate]:
    """Extract a recipe from the first element annotated as a schema.org Recipe item."""
    root = soup.find(attrs={"itemtype": MICRODATA_RECIPE_TYPE_RE})
    if root is None:
        return None

    ingredients = [
        clean_text(el.get_text(" ", strip=True))
        for el in root.select('[itemprop~="recipeIngredient"], [itemprop~="ingredients"]')
        if _owner(el) is root
    ]
    candidate = RecipeCandidate(
        name=_prop_text(root, "name"),
        description=_prop_text(root, "description"),
        ingredients=[i for i in ingredients if i],
        instructions=_instructions(root),
        prep_time=parse_duration(_prop_value(root, "prepTime") or None),
        cook_time=parse_duration(_prop_value(root, "cookTime") or None),
        total_time=parse_duration(_prop_value(root, "totalTime") or None),
        servings=parse_servings(_prop_value(root, "recipeYield", attrs=("content",)) or None),
        image=_image(root),
        cuisine=_prop_text(root, "recipeCuisine"),
        category=_prop_text(root, "recipeCategory"),
        calories=None,
    )
    logger.info(
        "Microdata recipe: name=%s, ingredients=%d, instructions=%d",
        candidate.name[:50] or "None",
        len(candidate.ingredients),
        len(candidate.instructions),
    )
    if not candidate.is_usable():
        logger.warning("Microdata recipe item has no usable content")
        return None
    return candidate

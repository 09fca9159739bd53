"""Heuristic recipe extraction from HTML structure."""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup

from tavola_recipes.app.services.url_parsing.constants import (
    INGREDIENT_MAX_CHARS,
    INGREDIENT_MIN_CHARS,
    INSTRUCTION_MAX_CHARS,
    INSTRUCTION_MIN_CHARS,
    MIN_USABLE_ITEMS,
)
from tavola_recipes.app.services.url_parsing.models import RecipeCandidate
from tavola_recipes.app.services.url_parsing.parsing_utils import (
    clean_text,
    looks_like_ingredient,
)

logger = logging.getLogger(__name__)


def _meta_content(soup: BeautifulSoup, **attrs) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return ""
    return clean_text(tag.get("content"))


def _find_title(soup: BeautifulSoup) -> str:
    h1 = soup.find("h1")
    title = clean_text(h1.get_text(" ", strip=True)) if h1 else ""
    if not title and soup.title:
        title = clean_text(soup.title.get_text())
    return title


def _find_ingredient_items(soup: BeautifulSoup) -> List[str]:
    """Unordered-list items that are short and mention a unit or pantry staple."""
    items: List[str] = []
    for li in soup.select("ul li"):
        text = li.get_text(" ", strip=True)
        if INGREDIENT_MIN_CHARS < len(text) < INGREDIENT_MAX_CHARS and looks_like_ingredient(text):
            items.append(text)
    return items


def _find_instruction_items(soup: BeautifulSoup) -> List[str]:
    """Ordered-list items of step-like length."""
    items: List[str] = []
    for li in soup.select("ol li"):
        text = li.get_text(" ", strip=True)
        if INSTRUCTION_MIN_CHARS < len(text) < INSTRUCTION_MAX_CHARS:
            items.append(text)
    return items


def extract_recipe_heuristic(soup: BeautifulSoup) -> Optional[RecipeCandidate]:
    """Extract a recipe from headings and lists when the page carries no annotations."""
    title = _find_title(soup)
    if not title:
        return None

    ingredients = _find_ingredient_items(soup)
    instructions = _find_instruction_items(soup)
    logger.info(
        "Heuristic scan: title=%s, ingredients=%d, instructions=%d",
        title[:50],
        len(ingredients),
        len(instructions),
    )
    if len(ingredients) < MIN_USABLE_ITEMS and len(instructions) < MIN_USABLE_ITEMS:
        return None

    return RecipeCandidate(
        name=title,
        description=_meta_content(soup, name="description"),
        ingredients=ingredients,
        instructions=instructions,
        image=_meta_content(soup, property="og:image"),
    )

"""URL recipe parsing package.

This package provides functionality for extracting recipes from URLs using
multiple strategies: schema.org JSON-LD, microdata, heuristic HTML parsing,
and LLM fallback.
"""

from tavola_recipes.app.services.url_parsing.html_fetcher import (
    InvalidUrlError,
    fetch_html,
    is_private_host,
    validate_url,
)
from tavola_recipes.app.services.url_parsing.models import (
    ExtractionResult,
    RecipeCandidate,
)
from tavola_recipes.app.services.url_parsing.parsing_utils import (
    clean_text,
    coerce_text_list,
    extract_instruction_text,
    looks_like_ingredient,
    parse_calories,
    parse_duration,
    parse_image,
    parse_servings,
    split_paragraphs,
)

__all__ = [
    # Models
    "ExtractionResult",
    "RecipeCandidate",
    # HTML fetching
    "InvalidUrlError",
    "fetch_html",
    "is_private_host",
    "validate_url",
    # Field parsers
    "clean_text",
    "coerce_text_list",
    "extract_instruction_text",
    "looks_like_ingredient",
    "parse_calories",
    "parse_duration",
    "parse_image",
    "parse_servings",
    "split_paragraphs",
]

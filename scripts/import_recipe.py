#!/usr/bin/env python
"""
Import a single recipe from a URL and print it as JSON.

Run manually:
    python scripts/import_recipe.py https://example.com/some-recipe [--no-llm]
"""
import argparse
import asyncio
import logging
import sys

import httpx

from tavola_recipes.app.api.deps import get_completion_client
from tavola_recipes.app.core.config import get_settings
from tavola_recipes.app.services.url_recipe_parser import RecipeNotFoundError, import_recipe_from_url

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("import_recipe")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("url")
    parser.add_argument("--no-llm", action="store_true", help="skip the LLM fallback")
    args = parser.parse_args()

    settings = get_settings()
    llm = None if args.no_llm else get_completion_client()
    try:
        recipe = asyncio.run(
            import_recipe_from_url(args.url, llm=llm, timeout=settings.fetch_timeout_seconds)
        )
    except (ValueError, httpx.HTTPError) as exc:
        logger.error("Failed to fetch %s: %s", args.url, exc)
        return 2
    except RecipeNotFoundError as exc:
        logger.error("%s", exc)
        return 1

    print(recipe.model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

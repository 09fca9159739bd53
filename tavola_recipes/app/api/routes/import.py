import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette import status

from tavola_recipes.app.api.deps import get_completion_client
from tavola_recipes.app.core.config import get_settings
from tavola_recipes.app.schemas.recipe import ImportErrorResponse, ImportUrlRequest, Recipe
from tavola_recipes.app.services import url_recipe_parser
from tavola_recipes.app.services.llm_client import CompletionClient
from tavola_recipes.app.services.url_parsing.html_fetcher import InvalidUrlError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes/import", tags=["import"])


def _error(status_code: int, error_code: str, message: str) -> JSONResponse:
    body = ImportErrorResponse(error_code=error_code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post(
    "/url",
    response_model=Recipe,
    responses={
        400: {"model": ImportErrorResponse},
        422: {"model": ImportErrorResponse},
    },
)
async def import_from_url(
    payload: ImportUrlRequest,
    llm: Optional[CompletionClient] = Depends(get_completion_client),
):
    settings = get_settings()
    try:
        return await url_recipe_parser.import_recipe_from_url(
            payload.url, llm=llm, timeout=settings.fetch_timeout_seconds
        )
    except InvalidUrlError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, "invalid_url", str(exc))
    except httpx.HTTPStatusError as exc:
        logger.warning("Fetching %s returned status %s", payload.url, exc.response.status_code)
        return _error(
            status.HTTP_400_BAD_REQUEST,
            "fetch_failed",
            f"Failed to fetch URL: {exc.response.status_code} {exc.response.reason_phrase}",
        )
    except httpx.HTTPError as exc:
        logger.warning("Fetching %s failed: %s", payload.url, exc)
        return _error(status.HTTP_400_BAD_REQUEST, "fetch_failed", f"Failed to fetch URL: {exc}")
    except url_recipe_parser.RecipeNotFoundError:
        return _error(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "parse_failed",
            "Could not extract recipe data from this URL. Try a recipe page from a popular cooking site.",
        )

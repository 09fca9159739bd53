from datetime import datetime, timezone

import httpx

from tavola_recipes.app.services import url_recipe_parser
from tavola_recipes.app.services.url_parsing.html_fetcher import InvalidUrlError
from tavola_recipes.app.services.url_parsing.models import RecipeCandidate


def _recipe():
    return url_recipe_parser.normalize_candidate(
        RecipeCandidate(
            name="Lemon Cod",
            ingredients=["2 cod fillets", "1 lemon"],
            instructions=["Season the cod.", "Bake with lemon."],
            prep_time=10,
            cook_time=15,
        ),
        "https://example.com/lemon-cod",
        imported_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )


def test_import_url_success(monkeypatch, client):
    calls = {}

    async def fake_import(url: str, llm=None, timeout: float = 10.0):
        calls["url"] = url
        calls["llm"] = llm
        return _recipe()

    monkeypatch.setattr(url_recipe_parser, "import_recipe_from_url", fake_import)

    response = client.post("/recipes/import/url", json={"url": "https://example.com/lemon-cod"})
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Lemon Cod"
    assert body["totalTime"] == 25
    assert body["prepTime"] == 10
    assert body["sourceUrl"] == "https://example.com/lemon-cod"
    assert body["importedAt"].startswith("2024-05-01")
    assert body["image"] == ""
    assert body["calories"] is None
    assert calls == {"url": "https://example.com/lemon-cod", "llm": None}


def test_import_url_not_found(monkeypatch, client):
    async def fake_import(url: str, llm=None, timeout: float = 10.0):
        raise url_recipe_parser.RecipeNotFoundError(url)

    monkeypatch.setattr(url_recipe_parser, "import_recipe_from_url", fake_import)

    response = client.post("/recipes/import/url", json={"url": "https://example.com/blog"})
    assert response.status_code == 422
    body = response.json()
    assert body["error_code"] == "parse_failed"
    assert "Could not extract recipe" in body["message"]


def test_import_url_fetch_failure(monkeypatch, client):
    async def fake_import(url: str, llm=None, timeout: float = 10.0):
        request = httpx.Request("GET", url)
        raise httpx.HTTPStatusError(
            "not found", request=request, response=httpx.Response(404, request=request)
        )

    monkeypatch.setattr(url_recipe_parser, "import_recipe_from_url", fake_import)

    response = client.post("/recipes/import/url", json={"url": "https://example.com/missing"})
    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "fetch_failed"
    assert "404" in body["message"]


def test_import_url_invalid_url(client):
    response = client.post("/recipes/import/url", json={"url": "ftp://example.com/recipe"})
    assert response.status_code == 400
    assert response.json()["error_code"] == "invalid_url"


def test_import_url_requires_url(client):
    response = client.post("/recipes/import/url", json={})
    assert response.status_code == 422
    body = response.json()
    assert body["error_code"] == "validation_error"
    assert body["details"][0]["field"] == "body.url"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_bad_field_values_do_not_look_like_invalid_url(monkeypatch, client):
    page = (
        '<html><head><script type="application/ld+json">'
        '{"@type": "Recipe", "name": "Cod", "prepTime": NaN}'
        "</script></head><body></body></html>"
    )

    async def fake_fetch(url: str, timeout: float = 10.0):
        return page

    monkeypatch.setattr(url_recipe_parser, "fetch_html", fake_fetch)

    response = client.post("/recipes/import/url", json={"url": "https://example.com/cod"})
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Cod"
    assert body["prepTime"] is None


def test_unsupported_content_type_is_invalid_url(monkeypatch, client):
    async def fake_fetch(url: str, timeout: float = 10.0):
        raise InvalidUrlError("Unsupported content type: application/pdf")

    monkeypatch.setattr(url_recipe_parser, "fetch_html", fake_fetch)

    response = client.post("/recipes/import/url", json={"url": "https://example.com/file.pdf"})
    assert response.status_code == 400
    assert response.json()["error_code"] == "invalid_url"

import pytest
from bs4 import BeautifulSoup
from fastapi.testclient import TestClient

from tavola_recipes.app.api.deps import get_completion_client
from tavola_recipes.app.main import create_app


class FakeCompletionClient:
    """Records prompts and replays a canned reply (or raises)."""

    def __init__(self, reply: str = "", exc: Exception | None = None):
        self.reply = reply
        self.exc = exc
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.exc is not None:
            raise self.exc
        return self.reply


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


@pytest.fixture
def app():
    app = create_app()
    app.dependency_overrides[get_completion_client] = lambda: None
    return app


@pytest.fixture
def client(app):
    return TestClient(app)

import pytest
from fastapi.testclient import TestClient

from ai_directory.ai import RankingOutcome
from ai_directory.catalog.schemas import CategoryCreate, ToolCreate
from ai_directory.catalog.store import CatalogStore
from ai_directory.config import Settings
from ai_directory.main import create_app

USER_TOKEN = "user-token"
ADMIN_TOKEN = "admin-token"


class FakeRanker:
    """Ranker double: returns a canned outcome or raises, and records calls."""

    def __init__(self, outcome=None, exc=None):
        self.outcome = outcome or RankingOutcome()
        self.exc = exc
        self.calls = []

    def rank(self, query, candidates):
        self.calls.append((query, [t.id for t in candidates]))
        if self.exc is not None:
            raise self.exc
        return self.outcome


@pytest.fixture
def store():
    return CatalogStore()


@pytest.fixture
def coding(store):
    return store.create_category(
        CategoryCreate(name="Coding", slug="coding", description="AI coding assistants")
    )


@pytest.fixture
def writing(store):
    return store.create_category(
        CategoryCreate(name="Content Writing", slug="content-writing", description="AI tools for content creation")
    )


@pytest.fixture
def copilot(store, coding):
    return store.create_tool(
        ToolCreate(
            name="GitHub Copilot",
            slug="github-copilot",
            description="AI pair programmer",
            category_id=coding.id,
            website_url="https://github.com/features/copilot",
            featured=True,
        )
    )


@pytest.fixture
def tabnine(store, coding):
    return store.create_tool(
        ToolCreate(
            name="Tabnine",
            slug="tabnine",
            description="AI code completion tool",
            category_id=coding.id,
            website_url="https://tabnine.com",
        )
    )


@pytest.fixture
def jasper(store, writing):
    return store.create_tool(
        ToolCreate(
            name="Jasper",
            slug="jasper",
            description="AI content writing platform",
            category_id=writing.id,
            website_url="https://jasper.ai",
        )
    )


@pytest.fixture
def ranker():
    return FakeRanker()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        SEED_DEMO_DATA=False,
        RANKER_BACKEND="none",
        API_TOKENS={USER_TOKEN: "alice", ADMIN_TOKEN: "root"},
        ADMIN_USERNAMES=["root"],
    )


@pytest.fixture
def app(settings, store, ranker):
    return create_app(settings=settings, store=store, ranker=ranker)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth():
    return {"Authorization": f"Bearer {USER_TOKEN}"}


@pytest.fixture
def admin_auth():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}

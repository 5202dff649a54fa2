"""Shared pytest fixtures for all tests."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select

from category_tree.db.database import Database
from category_tree.db.models.category_model import Category
from category_tree.main import create_app
from category_tree.services.category_service import CategoryService


@pytest.fixture
async def database():
    """Create an in-memory SQLite database with the schema already set up.

    Yields:
        Database: Database component pointing at the in-memory database.
    """
    db = Database("sqlite+aiosqlite:///:memory:", connect_max_retries=1, connect_retry_delay=0)
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    """Provide a single session on the test database."""
    async with database.session() as s:
        yield s


@pytest.fixture
def service():
    """Return a fresh CategoryService."""
    return CategoryService()


@pytest.fixture
def app(database):
    """Create a FastAPI app wired to the test database."""
    return create_app(database=database)


@pytest.fixture
async def client(app):
    """HTTP client that talks to the app in-process.

    Yields:
        httpx.AsyncClient: Client with base URL http://test.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def all_categories(database):
    """Return a coroutine function that reads every category row as (id, parent_id) pairs."""

    async def _read():
        async with database.session() as s:
            result = await s.execute(select(Category.id, Category.parent_id).order_by(Category.id))
            return [tuple(row) for row in result.all()]

    return _read

"""Shared fixtures across tests — in-memory SQLite via aiosqlite."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import db_dependency
from app.services.database import Database
from main import app


@pytest_asyncio.fixture
async def database():
    """Migrated in-memory database, discarded after each test."""
    database = Database(":memory:")
    await database.open()
    await database.migrate()
    yield database
    await database.close()


@pytest_asyncio.fixture
async def db(database: Database):
    """The raw connection, as the services receive it."""
    return database.connection


@pytest_asyncio.fixture
async def client(database: Database):
    """HTTP test client bound to the in-memory database."""

    async def override_db():
        yield database.connection

    app.dependency_overrides[db_dependency] = override_db
    app.state.database = database

    # raise_app_exceptions=False so 500 handlers can be asserted on
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()

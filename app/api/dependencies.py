"""Reusable FastAPI dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

import aiosqlite
from fastapi import Depends, Request

from app.services.database import Database


def get_database(request: Request) -> Database:
    """Return the storage client opened in the application lifespan."""
    return request.app.state.database


async def db_dependency(request: Request) -> AsyncGenerator[aiosqlite.Connection, None]:
    """Provide the SQLite connection for the duration of the request."""
    yield get_database(request).connection


DbDep = Annotated[aiosqlite.Connection, Depends(db_dependency)]
DatabaseDep = Annotated[Database, Depends(get_database)]

"""Healthcheck endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel

from app.api.dependencies import DatabaseDep

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    database: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(database: DatabaseDep) -> HealthResponse:
    """Return service status and whether the database answers."""
    return HealthResponse(status="ok", database=await database.ping())

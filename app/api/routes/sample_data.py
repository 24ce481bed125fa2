"""Seed or wipe demo data."""

from fastapi import APIRouter
from pydantic import BaseModel, field_validator

from app.api.dependencies import DbDep
from app.models.message import MessageResponse
from app.services import sample_data_service

router = APIRouter(prefix="/sample-data", tags=["sample-data"])


class SampleDataRequest(BaseModel):
    action: str

    @field_validator("action")
    @classmethod
    def validate_action(cls, v: str) -> str:
        if v not in ("create", "clear"):
            raise ValueError("Invalid action. Use 'create' or 'clear'")
        return v


@router.post("", response_model=MessageResponse)
async def manage_sample_data(payload: SampleDataRequest, db: DbDep) -> MessageResponse:
    """`create` seeds demo kittens with weight curves, `clear` deletes everything."""
    if payload.action == "create":
        count = await sample_data_service.create_sample_data(db)
        return MessageResponse(message=f"Sample data created successfully ({count} kittens)")

    count = await sample_data_service.clear_all_data(db)
    return MessageResponse(message=f"All data cleared successfully ({count} kittens removed)")

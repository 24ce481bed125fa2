"""CRUD endpoints for kittens."""

from fastapi import APIRouter, HTTPException, status

from app.api.dependencies import DbDep
from app.models.message import MessageResponse
from app.models.kitten import Kitten, KittenCreate, KittenSummary, KittenUpdate
from app.services import kitten_service, summary_service

router = APIRouter(prefix="/kittens", tags=["kittens"])


@router.get("", response_model=list[KittenSummary])
async def list_kittens(db: DbDep) -> list[KittenSummary]:
    """Return all kittens with their latest weight and recent change.

    Active kittens come first, then the others, each group sorted by name.
    """
    return await summary_service.list_kitten_summaries(db)


@router.post("", response_model=Kitten, status_code=status.HTTP_201_CREATED)
async def create_kitten(payload: KittenCreate, db: DbDep) -> Kitten:
    """Register a new kitten."""
    kitten_id = await kitten_service.create_kitten(db, payload)
    kitten = await kitten_service.get_kitten(db, kitten_id)
    if not kitten:
        # deleted between insert and read-back
        raise HTTPException(status_code=404, detail="Kitten not found")
    return kitten


@router.get("/{kitten_id}", response_model=Kitten)
async def get_kitten(kitten_id: int, db: DbDep) -> Kitten:
    """Return a kitten by its identifier."""
    kitten = await kitten_service.get_kitten(db, kitten_id)
    if not kitten:
        raise HTTPException(status_code=404, detail="Kitten not found")
    return kitten


@router.put("/{kitten_id}", response_model=Kitten)
async def update_kitten(kitten_id: int, payload: KittenUpdate, db: DbDep) -> Kitten:
    """Update a kitten (partial fields, null clears optional fields)."""
    updated = await kitten_service.update_kitten(db, kitten_id, payload)
    kitten = await kitten_service.get_kitten(db, kitten_id) if updated else None
    if not kitten:
        raise HTTPException(status_code=404, detail="Kitten not found")
    return kitten


@router.delete("/{kitten_id}", response_model=MessageResponse)
async def delete_kitten(kitten_id: int, db: DbDep) -> MessageResponse:
    """Delete a kitten and all its measurements (cascade)."""
    deleted = await kitten_service.delete_kitten(db, kitten_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Kitten not found")
    return MessageResponse(message="Kitten deleted successfully")

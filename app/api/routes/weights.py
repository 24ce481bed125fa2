"""Endpoints for weight measurements."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from app.api.dependencies import DbDep
from app.models.message import MessageResponse
from app.models.weight import (
    RecentWeightMeasurement,
    WeightMeasurement,
    WeightMeasurementCreate,
    WeightMeasurementUpdate,
)
from app.services import kitten_service, weight_service

router = APIRouter(prefix="/weights", tags=["weights"])


# Serialized as returned: recent measurements carry kitten_name, per-kitten ones don't
@router.get("", response_model=None)
async def list_weights(
    db: DbDep,
    kitten_id: Optional[int] = Query(None, description="Only this kitten's measurements"),
    limit: int = Query(10, ge=1, description="How many recent measurements (no kitten_id)"),
) -> list[WeightMeasurement] | list[RecentWeightMeasurement]:
    """
    Return weight measurements, most recent first.

    - `?kitten_id=N`: every measurement of that kitten (empty if none)
    - otherwise: the `limit` most recent measurements across all kittens
    """
    if kitten_id is not None:
        return await weight_service.list_measurements_by_kitten(db, kitten_id)
    return await weight_service.list_recent_measurements(db, limit)


@router.post("", response_model=WeightMeasurement, status_code=status.HTTP_201_CREATED)
async def create_weight(payload: WeightMeasurementCreate, db: DbDep) -> WeightMeasurement:
    """Record a weight measurement."""
    # Verify the kitten exists
    kitten = await kitten_service.get_kitten(db, payload.kitten_id)
    if not kitten:
        raise HTTPException(status_code=404, detail=f"Kitten {payload.kitten_id} not found")

    measurement_id = await weight_service.create_measurement(db, payload)
    measurement = await weight_service.get_measurement(db, measurement_id)
    if not measurement:
        raise HTTPException(status_code=404, detail="Weight measurement not found")
    return measurement


@router.get("/{measurement_id}", response_model=WeightMeasurement)
async def get_weight(measurement_id: int, db: DbDep) -> WeightMeasurement:
    measurement = await weight_service.get_measurement(db, measurement_id)
    if not measurement:
        raise HTTPException(status_code=404, detail="Weight measurement not found")
    return measurement


@router.put("/{measurement_id}", response_model=WeightMeasurement)
async def update_weight(
    measurement_id: int, payload: WeightMeasurementUpdate, db: DbDep
) -> WeightMeasurement:
    """Update a weight measurement (partial fields)."""
    updated = await weight_service.update_measurement(db, measurement_id, payload)
    measurement = await weight_service.get_measurement(db, measurement_id) if updated else None
    if not measurement:
        raise HTTPException(status_code=404, detail="Weight measurement not found")
    return measurement


@router.delete("/{measurement_id}", response_model=MessageResponse)
async def delete_weight(measurement_id: int, db: DbDep) -> MessageResponse:
    """Delete a weight measurement."""
    deleted = await weight_service.delete_measurement(db, measurement_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Weight measurement not found")
    return MessageResponse(message="Weight measurement deleted successfully")

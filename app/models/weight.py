from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class WeightMeasurementBase(BaseModel):
    kitten_id: int
    weight_grams: int = Field(..., description="Weight in grams")
    measurement_date: datetime
    notes: Optional[str] = Field(None, max_length=500)


class WeightMeasurementCreate(BaseModel):
    """Payload to record a weight measurement. Date defaults to now."""
    kitten_id: int
    weight_grams: int
    measurement_date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("kitten_id", "weight_grams", mode="before")
    @classmethod
    def validate_not_bool(cls, v, info: ValidationInfo):
        # JSON true/false would otherwise coerce to 1/0
        if isinstance(v, bool):
            label = "kitten ID" if info.field_name == "kitten_id" else "weight value"
            raise ValueError(f"Invalid {label}")
        return v

    @field_validator("weight_grams")
    @classmethod
    def validate_weight_grams(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Weight must be greater than 0")
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def validate_notes(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class WeightMeasurementUpdate(BaseModel):
    """Partial update — absent fields are kept, null clears notes."""
    weight_grams: Optional[int] = None
    measurement_date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("weight_grams", mode="before")
    @classmethod
    def validate_weight_not_bool(cls, v):
        if isinstance(v, bool):
            raise ValueError("Weight must be a positive number")
        return v

    @field_validator("weight_grams")
    @classmethod
    def validate_weight_grams(cls, v: Optional[int]) -> int:
        if v is None or v <= 0:
            raise ValueError("Weight must be a positive number")
        return v

    @field_validator("measurement_date")
    @classmethod
    def validate_measurement_date(cls, v: Optional[datetime]) -> datetime:
        if v is None:
            raise ValueError("measurement_date cannot be null")
        return v


class WeightMeasurement(WeightMeasurementBase):
    """Full measurement record returned from the database."""
    id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class RecentWeightMeasurement(WeightMeasurement):
    kitten_name: str

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator


Sex = Literal["Male", "Female", "Unknown"]
Status = Literal["Active", "Adopted", "Medical Hold", "Deceased"]

# Short forms accepted from older clients
_SEX_ALIASES = {"M": "Male", "F": "Female"}


def _normalize_sex(value):
    if isinstance(value, str):
        return _SEX_ALIASES.get(value.strip(), value.strip())
    return value


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class KittenBase(BaseModel):
    name: str = Field(..., max_length=100)
    birth_date: Optional[date] = None
    rescue_date: Optional[date] = None
    color: Optional[str] = Field(None, max_length=100)
    sex: Sex = "Unknown"
    status: Status = "Active"
    notes: Optional[str] = Field(None, max_length=2000)


class KittenCreate(KittenBase):
    """Payload to register a kitten."""
    # Missing, null and blank names all go through validate_name
    name: str = Field(None, max_length=100, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("Name is required")
        return v.strip() if isinstance(v, str) else v

    @field_validator("sex", mode="before")
    @classmethod
    def validate_sex(cls, v):
        return _normalize_sex(v)

    @field_validator("birth_date", "rescue_date", "color", "notes", mode="before")
    @classmethod
    def validate_optional_blank(cls, v):
        return _blank_to_none(v)


class KittenUpdate(BaseModel):
    """Partial update — absent fields are kept, null clears optional fields."""
    name: Optional[str] = Field(None, max_length=100)
    birth_date: Optional[date] = None
    rescue_date: Optional[date] = None
    color: Optional[str] = Field(None, max_length=100)
    sex: Optional[Sex] = None
    status: Optional[Status] = None
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("Name cannot be empty")
        return v.strip() if isinstance(v, str) else v

    @field_validator("sex", mode="before")
    @classmethod
    def validate_sex(cls, v):
        return _normalize_sex(v)

    @field_validator("sex", "status")
    @classmethod
    def validate_not_null(cls, v, info: ValidationInfo):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("birth_date", "rescue_date", "color", "notes", mode="before")
    @classmethod
    def validate_optional_blank(cls, v):
        return _blank_to_none(v)


class Kitten(KittenBase):
    """Full kitten record returned from the database."""
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class KittenSummary(Kitten):
    """Kitten annotated with its two most recent measurements."""
    latest_weight: Optional[int] = None
    latest_weight_date: Optional[datetime] = None
    previous_weight: Optional[int] = None
    previous_weight_date: Optional[datetime] = None
    weight_change: Optional[int] = None
    weight_change_days: Optional[int] = None

from .kitten import Kitten, KittenCreate, KittenSummary, KittenUpdate
from .weight import (
    RecentWeightMeasurement,
    WeightMeasurement,
    WeightMeasurementCreate,
    WeightMeasurementUpdate,
)

__all__ = [
    "Kitten", "KittenCreate", "KittenSummary", "KittenUpdate",
    "RecentWeightMeasurement", "WeightMeasurement",
    "WeightMeasurementCreate", "WeightMeasurementUpdate",
]

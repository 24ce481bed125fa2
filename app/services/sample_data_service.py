"""Demo data: seed a few kittens with weight curves, or wipe everything."""

import logging
import random
from datetime import date, datetime, time, timedelta, timezone

import aiosqlite

from app.models.kitten import KittenCreate
from app.models.weight import WeightMeasurementCreate
from app.services import kitten_service, weight_service

logger = logging.getLogger(__name__)

SAMPLE_KITTENS = [
    KittenCreate(
        name="Mittens",
        birth_date=date(2024, 5, 1),
        rescue_date=date(2024, 5, 15),
        color="Orange tabby",
        sex="Male",
        status="Active",
        notes="Very playful, loves to climb",
    ),
    KittenCreate(
        name="Shadow",
        birth_date=date(2024, 4, 28),
        rescue_date=date(2024, 5, 10),
        color="Black",
        sex="Female",
        status="Active",
        notes="Shy but very sweet",
    ),
    KittenCreate(
        name="Patches",
        birth_date=date(2024, 5, 3),
        rescue_date=date(2024, 5, 20),
        color="Calico",
        sex="Female",
        status="Adopted",
        notes="Beautiful calico, adopted by the Smith family",
    ),
]

# (days measured, base weight, daily gain, max noise, note on index)
_GROWTH_CURVES = {
    "Mittens": (10, 85, 8, 4, {9: "Looking healthy and active!"}),
    "Shadow": (8, 78, 6, 2, {0: "Small when found, gaining slowly"}),
}

_PATCHES_WEIGHTS = [
    (datetime(2024, 5, 25, tzinfo=timezone.utc), 145, "Ready for adoption!"),
    (datetime(2024, 6, 1, tzinfo=timezone.utc), 162, "Final weigh-in before going to new home"),
]


async def create_sample_data(
    db: aiosqlite.Connection,
    rng: random.Random | None = None,
    today: datetime | None = None,
) -> int:
    """Insert the demo kittens and their measurements. Returns the number of kittens."""
    rng = rng or random.Random()
    today = today or datetime.combine(date.today(), time(9, 0), tzinfo=timezone.utc)

    for kitten in SAMPLE_KITTENS:
        kitten_id = await kitten_service.create_kitten(db, kitten)

        if kitten.name in _GROWTH_CURVES:
            days, base, gain, noise, notes = _GROWTH_CURVES[kitten.name]
            for i in range(days):
                await weight_service.create_measurement(
                    db,
                    WeightMeasurementCreate(
                        kitten_id=kitten_id,
                        weight_grams=base + i * gain + rng.randint(0, noise),
                        measurement_date=today - timedelta(days=days - 1 - i),
                        notes=notes.get(i),
                    ),
                )
        elif kitten.name == "Patches":
            for measured_at, grams, note in _PATCHES_WEIGHTS:
                await weight_service.create_measurement(
                    db,
                    WeightMeasurementCreate(
                        kitten_id=kitten_id,
                        weight_grams=grams,
                        measurement_date=measured_at,
                        notes=note,
                    ),
                )

    logger.info("Sample data created: %d kittens", len(SAMPLE_KITTENS))
    return len(SAMPLE_KITTENS)


async def clear_all_data(db: aiosqlite.Connection) -> int:
    """Delete every kitten; measurements go with them. Returns the number deleted."""
    deleted = await kitten_service.delete_all_kittens(db)
    logger.info("All data cleared: %d kittens deleted", deleted)
    return deleted

"""Async CRUD operations for weight measurements."""

from datetime import datetime, timezone

import aiosqlite

from app.models.weight import (
    RecentWeightMeasurement,
    WeightMeasurement,
    WeightMeasurementCreate,
    WeightMeasurementUpdate,
)
from app.services.database import format_timestamp, parse_timestamp


def _row_to_measurement(row: aiosqlite.Row) -> WeightMeasurement:
    return WeightMeasurement(
        id=row["id"],
        kitten_id=row["kitten_id"],
        weight_grams=row["weight_grams"],
        measurement_date=parse_timestamp(row["measurement_date"]),
        notes=row["notes"],
        created_at=parse_timestamp(row["created_at"]),
    )


def _row_to_recent(row: aiosqlite.Row) -> RecentWeightMeasurement:
    return RecentWeightMeasurement(
        **_row_to_measurement(row).model_dump(),
        kitten_name=row["kitten_name"],
    )


async def create_measurement(
    db: aiosqlite.Connection, measurement: WeightMeasurementCreate
) -> int:
    """Record a weight measurement and return its id."""
    measured_at = measurement.measurement_date or datetime.now(timezone.utc)
    cursor = await db.execute(
        """INSERT INTO weight_measurements (kitten_id, weight_grams, measurement_date, notes)
           VALUES (?, ?, ?, ?)""",
        (
            measurement.kitten_id,
            measurement.weight_grams,
            format_timestamp(measured_at),
            measurement.notes,
        ),
    )
    await db.commit()
    return cursor.lastrowid


async def get_measurement(
    db: aiosqlite.Connection, measurement_id: int
) -> WeightMeasurement | None:
    """Return a measurement by id, or None."""
    async with db.execute(
        "SELECT * FROM weight_measurements WHERE id = ?", (measurement_id,)
    ) as cur:
        row = await cur.fetchone()
    return _row_to_measurement(row) if row else None


async def list_measurements_by_kitten(
    db: aiosqlite.Connection, kitten_id: int
) -> list[WeightMeasurement]:
    """Return all measurements for a kitten, most recent first."""
    rows = await db.execute_fetchall(
        """SELECT * FROM weight_measurements
           WHERE kitten_id = ?
           ORDER BY measurement_date DESC, id DESC""",
        (kitten_id,),
    )
    return [_row_to_measurement(r) for r in rows]


async def list_all_measurements(db: aiosqlite.Connection) -> list[WeightMeasurement]:
    rows = await db.execute_fetchall(
        "SELECT * FROM weight_measurements ORDER BY kitten_id, measurement_date DESC, id DESC"
    )
    return [_row_to_measurement(r) for r in rows]


async def list_recent_measurements(
    db: aiosqlite.Connection, limit: int = 10
) -> list[RecentWeightMeasurement]:
    """Return the latest measurements across all kittens, with the kitten's name."""
    rows = await db.execute_fetchall(
        """SELECT w.*, k.name AS kitten_name
           FROM weight_measurements w
           JOIN kittens k ON w.kitten_id = k.id
           ORDER BY w.measurement_date DESC, w.id DESC
           LIMIT ?""",
        (limit,),
    )
    return [_row_to_recent(r) for r in rows]


async def update_measurement(
    db: aiosqlite.Connection, measurement_id: int, update: WeightMeasurementUpdate
) -> bool:
    """Apply the fields present in ``update``. Returns True if the measurement exists."""
    changes = update.model_dump(exclude_unset=True)
    if not changes:
        return await get_measurement(db, measurement_id) is not None

    if "measurement_date" in changes:
        changes["measurement_date"] = format_timestamp(changes["measurement_date"])

    cols = ", ".join(f"{k} = ?" for k in changes)
    values = list(changes.values()) + [measurement_id]
    cursor = await db.execute(
        f"UPDATE weight_measurements SET {cols} WHERE id = ?", values
    )
    await db.commit()
    return cursor.rowcount > 0


async def delete_measurement(db: aiosqlite.Connection, measurement_id: int) -> bool:
    """Delete a measurement. Returns True if deleted."""
    cursor = await db.execute(
        "DELETE FROM weight_measurements WHERE id = ?", (measurement_id,)
    )
    await db.commit()
    return cursor.rowcount > 0

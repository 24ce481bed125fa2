"""Async CRUD operations for kittens."""

import aiosqlite

from app.models.kitten import Kitten, KittenCreate, KittenUpdate
from app.models.weight import WeightMeasurement
from app.services.database import parse_date, parse_timestamp


def _row_to_kitten(row: aiosqlite.Row) -> Kitten:
    return Kitten(
        id=row["id"],
        name=row["name"],
        birth_date=parse_date(row["birth_date"]),
        rescue_date=parse_date(row["rescue_date"]),
        color=row["color"],
        sex=row["sex"],
        status=row["status"],
        notes=row["notes"],
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row["updated_at"]),
    )


async def list_kittens(db: aiosqlite.Connection) -> list[Kitten]:
    """Return all kittens, active ones first, then by name."""
    rows = await db.execute_fetchall(
        "SELECT * FROM kittens ORDER BY status = 'Active' DESC, name, id"
    )
    return [_row_to_kitten(r) for r in rows]


async def list_kittens_with_measurements(
    db: aiosqlite.Connection,
) -> list[tuple[Kitten, list[WeightMeasurement]]]:
    """Return every kitten with all its measurements, read in one statement.

    A single SELECT sees one snapshot, so a measurement can never show up
    without its kitten.
    """
    rows = await db.execute_fetchall(
        """SELECT k.*,
                  w.id               AS m_id,
                  w.weight_grams     AS m_weight_grams,
                  w.measurement_date AS m_measurement_date,
                  w.notes            AS m_notes,
                  w.created_at       AS m_created_at
           FROM kittens k
           LEFT JOIN weight_measurements w ON w.kitten_id = k.id
           ORDER BY k.status = 'Active' DESC, k.name, k.id"""
    )
    grouped: dict[int, tuple[Kitten, list[WeightMeasurement]]] = {}
    for row in rows:
        if row["id"] not in grouped:
            grouped[row["id"]] = (_row_to_kitten(row), [])
        if row["m_id"] is not None:
            grouped[row["id"]][1].append(
                WeightMeasurement(
                    id=row["m_id"],
                    kitten_id=row["id"],
                    weight_grams=row["m_weight_grams"],
                    measurement_date=parse_timestamp(row["m_measurement_date"]),
                    notes=row["m_notes"],
                    created_at=parse_timestamp(row["m_created_at"]),
                )
            )
    return list(grouped.values())


async def get_kitten(db: aiosqlite.Connection, kitten_id: int) -> Kitten | None:
    """Return a kitten by id, or None if not found."""
    async with db.execute("SELECT * FROM kittens WHERE id = ?", (kitten_id,)) as cur:
        row = await cur.fetchone()
    return _row_to_kitten(row) if row else None


async def create_kitten(db: aiosqlite.Connection, kitten: KittenCreate) -> int:
    """Insert a new kitten and return its id."""
    cursor = await db.execute(
        """INSERT INTO kittens (name, birth_date, rescue_date, color, sex, status, notes)
           VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (
            kitten.name,
            kitten.birth_date.isoformat() if kitten.birth_date else None,
            kitten.rescue_date.isoformat() if kitten.rescue_date else None,
            kitten.color,
            kitten.sex,
            kitten.status,
            kitten.notes,
        ),
    )
    await db.commit()
    return cursor.lastrowid


async def update_kitten(db: aiosqlite.Connection, kitten_id: int, data: KittenUpdate) -> bool:
    """Apply the fields present in ``data``. Returns True if the kitten exists.

    Fields explicitly set to None are cleared; fields left out are kept.
    """
    updates = data.model_dump(exclude_unset=True)
    if not updates:
        return await get_kitten(db, kitten_id) is not None

    # Serialize dates
    for key in ("birth_date", "rescue_date"):
        if updates.get(key) is not None:
            updates[key] = updates[key].isoformat()

    cols = ", ".join(f"{k} = ?" for k in updates)
    values = list(updates.values()) + [kitten_id]
    cursor = await db.execute(f"UPDATE kittens SET {cols} WHERE id = ?", values)
    await db.commit()
    return cursor.rowcount > 0


async def delete_kitten(db: aiosqlite.Connection, kitten_id: int) -> bool:
    """Delete a kitten (and its measurements via cascade). Returns True if deleted."""
    cursor = await db.execute("DELETE FROM kittens WHERE id = ?", (kitten_id,))
    await db.commit()
    return cursor.rowcount > 0


async def delete_all_kittens(db: aiosqlite.Connection) -> int:
    """Delete every kitten and, by cascade, every measurement."""
    cursor = await db.execute("DELETE FROM kittens")
    await db.commit()
    return cursor.rowcount

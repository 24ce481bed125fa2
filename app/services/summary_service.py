"""Per-kitten weight summary: latest and previous measurement, change and elapsed days.

The computation is a pure function over already-loaded kittens and
measurements (``summarize_kittens``); ``list_kitten_summaries`` loads both
from storage and delegates to it.
"""

import math
from collections import defaultdict
from collections.abc import Iterable
from datetime import timedelta

import aiosqlite

from app.errors import DataIntegrityError
from app.models.kitten import Kitten, KittenSummary
from app.models.weight import WeightMeasurement
from app.services import kitten_service

_MS_PER_DAY = 24 * 60 * 60 * 1000


def days_between(latest, previous) -> int:
    """Ceiling of the exact gap in days (millisecond resolution).

    Identical timestamps give 0; any positive gap under a day gives 1.
    """
    elapsed_ms = (latest - previous) // timedelta(milliseconds=1)
    return math.ceil(elapsed_ms / _MS_PER_DAY)


def _display_key(kitten: Kitten):
    # Active first, then by name (code-point order, like SQLite's BINARY collation)
    return (kitten.status != "Active", kitten.name, kitten.id)


def summarize_kitten(
    kitten: Kitten, measurements: Iterable[WeightMeasurement]
) -> KittenSummary:
    """Annotate one kitten with its two most recent measurements."""
    ordered = sorted(
        measurements,
        key=lambda m: (m.measurement_date, m.id),
        reverse=True,
    )
    summary = KittenSummary(**kitten.model_dump())
    if not ordered:
        return summary

    latest = ordered[0]
    summary.latest_weight = latest.weight_grams
    summary.latest_weight_date = latest.measurement_date

    if len(ordered) > 1:
        previous = ordered[1]
        summary.previous_weight = previous.weight_grams
        summary.previous_weight_date = previous.measurement_date
        summary.weight_change = latest.weight_grams - previous.weight_grams
        summary.weight_change_days = days_between(
            latest.measurement_date, previous.measurement_date
        )
    return summary


def summarize_kittens(
    kittens: Iterable[Kitten], measurements: Iterable[WeightMeasurement]
) -> list[KittenSummary]:
    """Build display-ordered summaries for every kitten.

    Raises DataIntegrityError if a measurement belongs to no known kitten.
    """
    kittens = list(kittens)
    known_ids = {k.id for k in kittens}

    by_kitten: dict[int, list[WeightMeasurement]] = defaultdict(list)
    for m in measurements:
        if m.kitten_id not in known_ids:
            raise DataIntegrityError(
                f"Measurement {m.id} references missing kitten {m.kitten_id}"
            )
        by_kitten[m.kitten_id].append(m)

    return [
        summarize_kitten(k, by_kitten.get(k.id, ()))
        for k in sorted(kittens, key=_display_key)
    ]


async def list_kitten_summaries(db: aiosqlite.Connection) -> list[KittenSummary]:
    """Return every kitten with its recent-weight summary, ready for display."""
    loaded = await kitten_service.list_kittens_with_measurements(db)
    kittens = [kitten for kitten, _ in loaded]
    measurements = [m for _, kitten_measurements in loaded for m in kitten_measurements]
    return summarize_kittens(kittens, measurements)

"""Tests for the per-kitten weight summary."""

from datetime import datetime, timedelta, timezone

import pytest

from app.errors import DataIntegrityError
from app.models.kitten import Kitten, KittenCreate
from app.models.weight import WeightMeasurement, WeightMeasurementCreate
from app.services.kitten_service import create_kitten
from app.services.summary_service import (
    days_between,
    list_kitten_summaries,
    summarize_kittens,
)
from app.services.weight_service import create_measurement

_T0 = datetime(2024, 5, 20, 9, 0, tzinfo=timezone.utc)


def _kitten(kitten_id, name, status="Active"):
    return Kitten(
        id=kitten_id, name=name, status=status, created_at=_T0, updated_at=_T0
    )


def _weight(measurement_id, kitten_id, grams, when):
    return WeightMeasurement(
        id=measurement_id,
        kitten_id=kitten_id,
        weight_grams=grams,
        measurement_date=when,
        created_at=when,
    )


# ---------------------------------------------------------------------------
# days_between
# ---------------------------------------------------------------------------

def test_days_between_whole_days():
    assert days_between(_T0 + timedelta(days=3), _T0) == 3


def test_days_between_identical_timestamps():
    assert days_between(_T0, _T0) == 0


def test_days_between_partial_day_rounds_up():
    assert days_between(_T0 + timedelta(hours=1), _T0) == 1
    assert days_between(_T0 + timedelta(days=2, minutes=1), _T0) == 3


def test_days_between_sub_millisecond_gap_is_zero():
    assert days_between(_T0 + timedelta(microseconds=500), _T0) == 0


# ---------------------------------------------------------------------------
# summarize_kittens
# ---------------------------------------------------------------------------

def test_mittens_example():
    kittens = [_kitten(1, "Mittens")]
    weights = [
        _weight(1, 1, 100, _T0),
        _weight(2, 1, 150, _T0 + timedelta(days=3)),
    ]
    [summary] = summarize_kittens(kittens, weights)
    assert summary.latest_weight == 150
    assert summary.latest_weight_date == _T0 + timedelta(days=3)
    assert summary.previous_weight == 100
    assert summary.weight_change == 50
    assert summary.weight_change_days == 3


def test_weight_loss_is_negative():
    kittens = [_kitten(1, "Shadow")]
    weights = [
        _weight(1, 1, 130, _T0),
        _weight(2, 1, 110, _T0 + timedelta(days=1)),
        _weight(3, 1, 90, _T0 - timedelta(days=5)),
    ]
    [summary] = summarize_kittens(kittens, weights)
    assert summary.latest_weight == 110
    assert summary.previous_weight == 130
    assert summary.weight_change == -20
    assert summary.weight_change_days == 1


def test_single_measurement_has_no_change():
    [summary] = summarize_kittens([_kitten(1, "Bean")], [_weight(1, 1, 95, _T0)])
    assert summary.latest_weight == 95
    assert summary.latest_weight_date == _T0
    assert summary.previous_weight is None
    assert summary.weight_change is None
    assert summary.weight_change_days is None


def test_no_measurements():
    [summary] = summarize_kittens([_kitten(1, "Bean")], [])
    assert summary.latest_weight is None
    assert summary.latest_weight_date is None
    assert summary.weight_change is None


def test_same_timestamp_ties_broken_by_id():
    kittens = [_kitten(1, "Twin")]
    weights = [_weight(7, 1, 100, _T0), _weight(9, 1, 104, _T0)]
    [summary] = summarize_kittens(kittens, reversed(weights))
    assert summary.latest_weight == 104
    assert summary.previous_weight == 100
    assert summary.weight_change == 4
    assert summary.weight_change_days == 0


def test_order_active_first_then_name():
    kittens = [
        _kitten(1, "Patches", status="Adopted"),
        _kitten(2, "Shadow"),
        _kitten(3, "Ash", status="Medical Hold"),
        _kitten(4, "Mittens"),
        _kitten(5, "mittens"),
    ]
    names = [s.name for s in summarize_kittens(kittens, [])]
    # binary collation: uppercase sorts before lowercase
    assert names == ["Mittens", "Shadow", "mittens", "Ash", "Patches"]


def test_measurements_are_attached_to_the_right_kitten():
    kittens = [_kitten(1, "A"), _kitten(2, "B")]
    weights = [
        _weight(1, 1, 100, _T0),
        _weight(2, 2, 200, _T0),
        _weight(3, 2, 210, _T0 + timedelta(days=2)),
    ]
    a, b = summarize_kittens(kittens, weights)
    assert (a.latest_weight, a.weight_change) == (100, None)
    assert (b.latest_weight, b.weight_change, b.weight_change_days) == (210, 10, 2)


def test_orphaned_measurement_raises():
    with pytest.raises(DataIntegrityError):
        summarize_kittens([_kitten(1, "A")], [_weight(1, 42, 100, _T0)])


# ---------------------------------------------------------------------------
# list_kitten_summaries (storage-backed)
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_kitten_summaries(db):
    mittens = await create_kitten(db, KittenCreate(name="Mittens"))
    await create_kitten(db, KittenCreate(name="Patches", status="Adopted"))
    await create_kitten(db, KittenCreate(name="Bean"))
    for grams, day in ((100, 0), (150, 3)):
        await create_measurement(
            db,
            WeightMeasurementCreate(
                kitten_id=mittens, weight_grams=grams, measurement_date=_T0 + timedelta(days=day)
            ),
        )

    summaries = await list_kitten_summaries(db)
    assert [s.name for s in summaries] == ["Bean", "Mittens", "Patches"]
    bean, mit, patches = summaries
    assert bean.latest_weight is None
    assert (mit.weight_change, mit.weight_change_days) == (50, 3)
    assert patches.latest_weight is None


@pytest.mark.asyncio
async def test_list_kitten_summaries_malformed_date(db):
    mittens = await create_kitten(db, KittenCreate(name="Mittens"))
    await db.execute(
        "INSERT INTO weight_measurements (kitten_id, weight_grams, measurement_date) "
        "VALUES (?, ?, ?)",
        (mittens, 100, "not a date"),
    )
    await db.commit()
    with pytest.raises(DataIntegrityError):
        await list_kitten_summaries(db)


@pytest.mark.asyncio
async def test_list_kitten_summaries_reads_one_snapshot(db, monkeypatch):
    """Writes landing between two separate reads must not look like orphans."""
    from app.services import weight_service

    await create_kitten(db, KittenCreate(name="Early"))
    original_list_all = weight_service.list_all_measurements

    async def list_all_after_late_write(conn):
        late = await create_kitten(conn, KittenCreate(name="Late"))
        await create_measurement(
            conn,
            WeightMeasurementCreate(kitten_id=late, weight_grams=100, measurement_date=_T0),
        )
        return await original_list_all(conn)

    monkeypatch.setattr(weight_service, "list_all_measurements", list_all_after_late_write)

    summaries = await list_kitten_summaries(db)
    assert [s.name for s in summaries] == ["Early"]
    assert summaries[0].latest_weight is None

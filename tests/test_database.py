"""Tests for the storage client and timestamp helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from app.errors import DataIntegrityError, StorageError
from app.services.database import (
    Database,
    format_timestamp,
    parse_date,
    parse_timestamp,
)


@pytest.mark.asyncio
async def test_migrate_is_idempotent(database: Database):
    await database.migrate()
    await database.migrate()
    rows = await database.connection.execute_fetchall(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name IN ('kittens', 'weight_measurements')"
    )
    assert {r["name"] for r in rows} == {"kittens", "weight_measurements"}


@pytest.mark.asyncio
async def test_open_close_lifecycle():
    database = Database(":memory:")
    assert not database.is_open
    assert await database.ping() is False
    with pytest.raises(StorageError):
        database.connection

    await database.open()
    assert database.is_open
    assert await database.ping() is True

    await database.close()
    assert not database.is_open
    await database.close()  # second close is a no-op


@pytest.mark.asyncio
async def test_file_database_creates_parent_dir(tmp_path):
    path = tmp_path / "nested" / "kittens.db"
    database = Database(str(path))
    await database.open()
    await database.migrate()
    await database.close()
    assert path.exists()


def test_format_timestamp_naive_is_utc():
    assert format_timestamp(datetime(2024, 5, 20, 9, 0)) == "2024-05-20T09:00:00.000000+00:00"


def test_format_timestamp_converts_offsets():
    paris = timezone(timedelta(hours=2))
    assert format_timestamp(datetime(2024, 5, 20, 11, 0, tzinfo=paris)) == (
        "2024-05-20T09:00:00.000000+00:00"
    )


def test_parse_timestamp_sqlite_default_format():
    parsed = parse_timestamp("2024-05-20 09:00:00")
    assert parsed == datetime(2024, 5, 20, 9, 0, tzinfo=timezone.utc)


def test_parse_timestamp_malformed():
    with pytest.raises(DataIntegrityError):
        parse_timestamp("last tuesday")


def test_parse_date():
    assert parse_date(None) is None
    assert parse_date("2024-05-01") == date(2024, 5, 1)
    with pytest.raises(DataIntegrityError):
        parse_date("May 1st")

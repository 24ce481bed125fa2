"""SQLite storage client (aiosqlite) and schema migration."""

import logging
import os
from datetime import date, datetime, timezone

import aiosqlite

from app.errors import DataIntegrityError, StorageError

DATABASE_URL = os.getenv("DATABASE_URL", "data/kittentrack.db")

__all__ = [
    "DATABASE_URL", "Database", "SCHEMA",
    "format_timestamp", "parse_date", "parse_timestamp",
]

logger = logging.getLogger(__name__)

_CREATE_KITTENS = """
CREATE TABLE IF NOT EXISTS kittens (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    name         TEXT    NOT NULL,
    birth_date   TEXT,
    rescue_date  TEXT,
    color        TEXT,
    sex          TEXT    NOT NULL DEFAULT 'Unknown'
                         CHECK(sex IN ('Male', 'Female', 'Unknown')),
    status       TEXT    NOT NULL DEFAULT 'Active'
                         CHECK(status IN ('Active', 'Adopted', 'Medical Hold', 'Deceased')),
    notes        TEXT,
    created_at   TEXT    NOT NULL DEFAULT (datetime('now')),
    updated_at   TEXT    NOT NULL DEFAULT (datetime('now'))
)
"""

_CREATE_WEIGHT_MEASUREMENTS = """
CREATE TABLE IF NOT EXISTS weight_measurements (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    kitten_id         INTEGER NOT NULL REFERENCES kittens(id) ON DELETE CASCADE,
    weight_grams      INTEGER NOT NULL CHECK(weight_grams > 0),
    measurement_date  TEXT    NOT NULL,
    notes             TEXT,
    created_at        TEXT    NOT NULL DEFAULT (datetime('now'))
)
"""

_CREATE_INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_weight_measurements_kitten_id "
    "ON weight_measurements(kitten_id)",
    "CREATE INDEX IF NOT EXISTS idx_weight_measurements_date "
    "ON weight_measurements(measurement_date)",
)

# recursive_triggers is off by default, so the inner UPDATE does not re-fire
_CREATE_UPDATED_AT_TRIGGER = """
CREATE TRIGGER IF NOT EXISTS update_kittens_updated_at
AFTER UPDATE ON kittens
FOR EACH ROW
BEGIN
    UPDATE kittens SET updated_at = datetime('now') WHERE id = NEW.id;
END
"""

SCHEMA = (
    _CREATE_KITTENS,
    _CREATE_WEIGHT_MEASUREMENTS,
    *_CREATE_INDEXES,
    _CREATE_UPDATED_AT_TRIGGER,
)


def format_timestamp(value: datetime) -> str:
    """Serialize a datetime as UTC ISO-8601 text (naive values are taken as UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(value: str) -> datetime:
    """Parse a stored timestamp into an aware UTC datetime."""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise DataIntegrityError(f"Malformed stored timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        # datetime('now') defaults are naive UTC
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise DataIntegrityError(f"Malformed stored date: {value!r}") from e


class Database:
    """Process-owned SQLite client with an explicit open/migrate/close lifecycle."""

    def __init__(self, db_url: str = DATABASE_URL):
        self.db_url = db_url
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StorageError("Database is not open")
        return self._conn

    async def open(self) -> None:
        """Connect and enable foreign keys. Creates the parent directory if needed."""
        if self._conn is not None:
            return
        if self.db_url != ":memory:":
            parent = os.path.dirname(self.db_url)
            if parent:
                os.makedirs(parent, exist_ok=True)
        try:
            conn = await aiosqlite.connect(self.db_url)
            conn.row_factory = aiosqlite.Row
            await conn.execute("PRAGMA foreign_keys = ON")
        except aiosqlite.Error as e:
            raise StorageError(f"Could not open database {self.db_url}") from e
        self._conn = conn
        logger.info("Database opened at %s", self.db_url)

    async def migrate(self) -> None:
        """Create tables, indexes and triggers. Safe to run repeatedly."""
        conn = self.connection
        try:
            for statement in SCHEMA:
                await conn.execute(statement)
            await conn.commit()
        except aiosqlite.Error as e:
            raise StorageError("Schema migration failed") from e
        logger.info("Database schema is up to date")

    async def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        if self._conn is None:
            return False
        try:
            async with self._conn.execute("SELECT 1") as cur:
                await cur.fetchone()
        except aiosqlite.Error:
            logger.warning("Database ping failed", exc_info=True)
            return False
        return True

    async def close(self) -> None:
        if self._conn is None:
            return
        await self._conn.close()
        self._conn = None
        logger.info("Database closed")

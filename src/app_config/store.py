"""SQLite-backed single-record snapshot store used by caching providers."""

from __future__ import annotations

import logging
import re
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from app_config.errors import CacheUnavailableError, StoreInitError

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"
_TABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True, slots=True)
class Snapshot:
    version: int
    data: str


class SnapshotStore:
    """
    Holds the last observed version and payload for one provider.

    The record lives in row ``id=0`` of ``table``. With no ``path`` the database is
    in-memory, so nothing survives the process.
    """

    def __init__(self, table: str, path: Optional[str] = None) -> None:
        if not _TABLE_NAME.match(table):
            raise StoreInitError(f"Invalid cache table name: {table}")
        self._table = table
        self._location = str(Path(path).expanduser()) if path else IN_MEMORY

        try:
            self._conn = sqlite3.connect(self._location, isolation_level=None)
        except sqlite3.Error as exc:
            raise StoreInitError(f"Unable to open state file {self._location}: {exc}") from exc

        try:
            self._create()
        except sqlite3.Error as exc:
            self._conn.close()
            raise StoreInitError(f"Unable to create cache in {self._location}: {exc}") from exc
        logger.debug("store.opened location=%s table=%s", self._location, self._table)

    @property
    def location(self) -> str:
        return self._location

    def _create(self) -> None:
        self._conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self._table} (
                id      INTEGER PRIMARY KEY,
                version INTEGER NOT NULL,
                data    TEXT NOT NULL
            )
            """
        )
        self._conn.execute(
            f"""
            INSERT INTO {self._table} (id, version, data)
            SELECT 0, 0, ''
            WHERE NOT EXISTS (SELECT 1 FROM {self._table} WHERE id = 0)
            """
        )

    def read(self) -> Snapshot:
        try:
            row = self._conn.execute(f"SELECT version, data FROM {self._table} WHERE id = 0").fetchone()
        except sqlite3.Error as exc:
            raise CacheUnavailableError(f"Error fetching data from cache: {exc}") from exc
        if row is None:
            raise CacheUnavailableError(f"Cache record missing from {self._location}")
        return Snapshot(version=int(row[0]), data=row[1])

    def write(self, snapshot: Snapshot) -> None:
        """Replace the record. Raises ``sqlite3.Error`` on failure."""
        self._conn.execute(
            f"UPDATE {self._table} SET version = ?, data = ? WHERE id = 0",
            (snapshot.version, snapshot.data),
        )

    def close(self) -> None:
        self._conn.close()

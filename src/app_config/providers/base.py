from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from app_config.store import Snapshot, SnapshotStore

logger = logging.getLogger(__name__)


class CachedProvider:
    """Shared snapshot handling for providers backed by a ``SnapshotStore``."""

    name: str = "cached"
    table: str = "snapshot"

    def __init__(self, *, state_file: Optional[str] = None) -> None:
        self._store = SnapshotStore(self.table, state_file)

    @property
    def store(self) -> SnapshotStore:
        return self._store

    def query(self) -> str:
        return self._store.read().data

    def close(self) -> None:
        self._store.close()

    def _remember(self, snapshot: Snapshot) -> None:
        # The payload is already in hand, so hooks still run if caching fails.
        try:
            self._store.write(snapshot)
        except sqlite3.Error:
            logger.exception(
                "provider.cache_write_failed provider=%s location=%s version=%s",
                self.name,
                self._store.location,
                snapshot.version,
            )

"""Read/write helpers shared by the stores.

Reads never fail: an unreadable key is reported as absent. Writes raise
PersistenceError so callers can keep their in-memory state unchanged.
"""

import logging
import sqlite3

from weatherdash.storage import kv_repo

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Raised when a value could not be written to storage."""

    def __init__(self, key: str, cause: Exception):
        super().__init__(f"Could not persist {key!r}: {cause}")
        self.key = key


def read_item(conn: sqlite3.Connection, key: str) -> str | None:
    try:
        return kv_repo.get_item(conn, key)
    except sqlite3.Error as e:
        logger.warning("Could not read %r from storage, treating as absent: %s", key, e)
        return None


def write_item(conn: sqlite3.Connection, key: str, value: str | None) -> None:
    """Store `value` under `key`, or delete the key when value is None."""
    try:
        if value is None:
            kv_repo.remove_item(conn, key)
        else:
            kv_repo.set_item(conn, key, value)
    except sqlite3.Error as e:
        logger.warning("Storage write for %r failed: %s", key, e)
        raise PersistenceError(key, e) from e

"""Repository for the local key-value storage table."""

import sqlite3


def get_item(conn: sqlite3.Connection, key: str) -> str | None:
    """Get a stored value, or None if the key is absent."""
    row = conn.execute(
        "SELECT value FROM local_storage WHERE key = ?", (key,)
    ).fetchone()
    if row is None:
        return None
    return row[0]


def set_item(conn: sqlite3.Connection, key: str, value: str) -> None:
    """Insert or replace a value and commit."""
    conn.execute(
        "INSERT INTO local_storage (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP) "
        "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP",
        (key, value),
    )
    conn.commit()


def remove_item(conn: sqlite3.Connection, key: str) -> None:
    conn.execute("DELETE FROM local_storage WHERE key = ?", (key,))
    conn.commit()

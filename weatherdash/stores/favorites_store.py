"""Ordered, name-deduplicated favorites persisted as a JSON array."""

import json
import logging
import sqlite3

from weatherdash.models.weather import WeatherSnapshot
from weatherdash.stores.persistence import read_item, write_item

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favorites"


class FavoritesStore:
    """Favorites keyed by exact place name, in insertion order.

    Each mutation writes the whole collection before the in-memory copy
    changes, so list() only ever shows what is already persisted.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self._items: list[WeatherSnapshot] = self._load()

    def _load(self) -> list[WeatherSnapshot]:
        raw = read_item(self.conn, FAVORITES_KEY)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("favorites is not a list")
            return [WeatherSnapshot.from_dict(item) for item in data]
        except ValueError as e:
            logger.warning("Ignoring corrupt favorites in storage: %s", e)
            return []

    def _commit(self, items: list[WeatherSnapshot]) -> None:
        if items:
            value = json.dumps([s.to_dict() for s in items])
        else:
            value = None
        write_item(self.conn, FAVORITES_KEY, value)
        self._items = items

    def list(self) -> list[WeatherSnapshot]:
        return list(self._items)

    def contains(self, name: str) -> bool:
        return any(s.name == name for s in self._items)

    def add(self, snapshot: WeatherSnapshot) -> bool:
        """Append unless a favorite with the same name exists. Returns True if added."""
        if self.contains(snapshot.name):
            return False
        self._commit(self._items + [snapshot])
        logger.info("Added favorite %s", snapshot.name)
        return True

    def remove(self, name: str) -> bool:
        """Remove the favorite with this name. Returns True if one was removed."""
        if not self.contains(name):
            return False
        self._commit([s for s in self._items if s.name != name])
        logger.info("Removed favorite %s", name)
        return True

    def clear(self) -> None:
        self._commit([])
        logger.info("Cleared favorites")

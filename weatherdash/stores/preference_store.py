"""Persisted measurement-unit preference."""

import logging
import sqlite3

from weatherdash.models.weather import Unit
from weatherdash.stores.persistence import read_item, write_item

logger = logging.getLogger(__name__)

UNIT_KEY = "unit"
DEFAULT_UNIT = Unit.METRIC


class PreferenceStore:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get(self) -> Unit:
        """Return the stored unit, or metric if absent or malformed."""
        raw = read_item(self.conn, UNIT_KEY)
        if raw is None:
            return DEFAULT_UNIT
        try:
            return Unit(raw)
        except ValueError:
            logger.warning("Ignoring malformed unit preference %r", raw)
            return DEFAULT_UNIT

    def set(self, unit: Unit) -> None:
        write_item(self.conn, UNIT_KEY, Unit(unit).value)

    def toggle(self) -> Unit:
        new_unit = self.get().toggled()
        self.set(new_unit)
        return new_unit

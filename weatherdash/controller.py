"""Dashboard controller: the only mutation path for search, unit and favorites state.

Renderers either poll view() or subscribe() to be handed a fresh
DashboardView after every change.
"""

import logging
import sqlite3
import threading
import time
from collections.abc import Callable
from typing import Protocol

from weatherdash.config.schema import DashboardConfig
from weatherdash.ingest.openweather_client import LookupFailed, OpenWeatherClient
from weatherdash.models.dashboard import (
    DashboardView,
    Notification,
    NotificationLevel,
    SearchState,
    SearchStatus,
)
from weatherdash.models.weather import Unit, WeatherSnapshot
from weatherdash.stores.favorites_store import FavoritesStore
from weatherdash.stores.persistence import PersistenceError
from weatherdash.stores.preference_store import PreferenceStore

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Please enter a city name"
LOOKUP_FAILED_MESSAGE = "City not found. Please try again."
SAVE_FAILED_MESSAGE = "Could not save your changes"
DEFAULT_NOTIFICATION_SECONDS = 6.0


class WeatherLookup(Protocol):
    def lookup(self, place: str, unit: Unit) -> WeatherSnapshot: ...


Listener = Callable[[DashboardView], None]


class DashboardController:
    def __init__(
        self,
        client: WeatherLookup,
        favorites: FavoritesStore,
        preferences: PreferenceStore,
        notification_seconds: float = DEFAULT_NOTIFICATION_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.favorites = favorites
        self.preferences = preferences
        self.notification_seconds = notification_seconds
        self._clock = clock
        self._unit = preferences.get()
        self._state = SearchState()
        self._notification: Notification | None = None
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    # --- View ---

    @property
    def unit(self) -> Unit:
        return self._unit

    @property
    def status(self) -> SearchStatus:
        return self._state.status

    def view(self) -> DashboardView:
        with self._lock:
            return self._view_locked()

    def _view_locked(self) -> DashboardView:
        now = self._clock()
        notification = self._notification
        if notification is not None and not notification.is_active(now):
            notification = self._notification = None
        remaining = notification.expires_at - now if notification else 0.0
        return DashboardView(
            status=self._state.status,
            query=self._state.query,
            error=self._state.error,
            snapshot=self._state.snapshot,
            unit=self._unit,
            favorites=self.favorites.list(),
            notification=notification,
            notification_remaining=remaining,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` with the new view after each change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        if not self._listeners:
            return
        view = self.view()
        for listener in list(self._listeners):
            listener(view)

    def _notify(self, message: str, level: NotificationLevel) -> None:
        self._notification = Notification(
            message=message,
            level=level,
            expires_at=self._clock() + self.notification_seconds,
        )

    def dismiss_notification(self) -> None:
        with self._lock:
            self._notification = None
        self._emit()

    # --- Search ---

    def begin_search(self, raw_query: str) -> int | None:
        """Validate the query and enter SEARCHING.

        Returns the sequence number to pass to complete_search(), or None
        when no lookup should be made (empty query, or a search is
        already in flight).
        """
        query = raw_query.strip()
        with self._lock:
            if self._state.status == SearchStatus.SEARCHING:
                logger.debug("Search for %r ignored, one is already in flight", query)
                return None
            self._state.query = raw_query
            if not query:
                self._state.status = SearchStatus.FAILED
                self._state.error = EMPTY_QUERY_MESSAGE
                self._notify(EMPTY_QUERY_MESSAGE, NotificationLevel.ERROR)
                seq = None
            else:
                self._state.sequence += 1
                self._state.status = SearchStatus.SEARCHING
                self._state.error = ""
                seq = self._state.sequence
        self._emit()
        return seq

    def complete_search(
        self, sequence: int, snapshot: WeatherSnapshot | None
    ) -> bool:
        """Apply a lookup result. A None snapshot means the lookup failed.

        Results from a superseded search are discarded; returns False then.
        """
        with self._lock:
            if (
                sequence != self._state.sequence
                or self._state.status != SearchStatus.SEARCHING
            ):
                logger.debug("Discarding stale result for search #%d", sequence)
                return False
            if snapshot is None:
                self._state.status = SearchStatus.FAILED
                self._state.error = LOOKUP_FAILED_MESSAGE
                self._notify(LOOKUP_FAILED_MESSAGE, NotificationLevel.ERROR)
            else:
                self._state.status = SearchStatus.SUCCESS
                self._state.snapshot = snapshot
                self._state.error = ""
        self._emit()
        return True

    def cancel_search(self) -> None:
        """Abandon an in-flight search; its result will be discarded."""
        with self._lock:
            if self._state.status != SearchStatus.SEARCHING:
                return
            self._state.sequence += 1
            self._state.status = SearchStatus.IDLE
        self._emit()

    def start_search(self, raw_query: str) -> SearchStatus:
        """Run a full search and return the resulting status."""
        seq = self.begin_search(raw_query)
        if seq is None:
            return self.status
        unit = self._unit
        try:
            snapshot = self.client.lookup(raw_query.strip(), unit)
        except LookupFailed:
            snapshot = None
        except Exception:
            # Leave SEARCHING before propagating so later searches still run
            logger.exception("Unexpected error looking up %r", raw_query.strip())
            self.complete_search(seq, None)
            raise
        self.complete_search(seq, snapshot)
        return self.status

    # --- Preferences ---

    def toggle_unit(self) -> Unit:
        """Flip metric/imperial for future lookups. Shown results are not reconverted."""
        with self._lock:
            new_unit = self._unit.toggled()
            try:
                self.preferences.set(new_unit)
            except PersistenceError:
                self._notify(SAVE_FAILED_MESSAGE, NotificationLevel.WARNING)
            # The session keeps the new unit even if it could not be saved.
            self._unit = new_unit
        self._emit()
        return new_unit

    # --- Favorites ---

    def add_current_to_favorites(self) -> bool:
        with self._lock:
            snapshot = self._state.snapshot
            if self._state.status != SearchStatus.SUCCESS or snapshot is None:
                return False
            added = self._mutate_favorites(lambda: self.favorites.add(snapshot))
        self._emit()
        return added

    def remove_favorite(self, name: str) -> bool:
        with self._lock:
            removed = self._mutate_favorites(lambda: self.favorites.remove(name))
        self._emit()
        return removed

    def clear_favorites(self) -> None:
        with self._lock:
            self._mutate_favorites(self.favorites.clear)
        self._emit()

    def _mutate_favorites(self, op: Callable[[], bool | None]) -> bool:
        try:
            return bool(op())
        except PersistenceError as e:
            logger.warning("Favorites change not saved: %s", e)
            self._notify(SAVE_FAILED_MESSAGE, NotificationLevel.WARNING)
            return False


def create_controller(
    config: DashboardConfig,
    conn: sqlite3.Connection,
    client: WeatherLookup | None = None,
) -> DashboardController:
    """Wire a controller to storage and, unless one is given, an OpenWeather client."""
    if client is None:
        client = OpenWeatherClient(
            api_key=config.api.api_key,
            base_url=config.api.base_url,
            timeout=config.api.timeout_seconds,
        )
    return DashboardController(
        client=client,
        favorites=FavoritesStore(conn),
        preferences=PreferenceStore(conn),
        notification_seconds=config.ui.notification_seconds,
    )

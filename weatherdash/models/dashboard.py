"""Search state and view models exposed by the dashboard controller."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from weatherdash.models.weather import Unit, WeatherSnapshot


class SearchStatus(StrEnum):
    IDLE = "idle"
    SEARCHING = "searching"
    SUCCESS = "success"
    FAILED = "failed"


class NotificationLevel(StrEnum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class SearchState:
    """Transient per-session search state. Never persisted."""

    query: str = ""
    status: SearchStatus = SearchStatus.IDLE
    error: str = ""
    snapshot: WeatherSnapshot | None = None
    sequence: int = 0


@dataclass(frozen=True)
class Notification:
    message: str
    level: NotificationLevel
    expires_at: float  # clock seconds

    def is_active(self, now: float) -> bool:
        return now < self.expires_at


@dataclass(frozen=True)
class DashboardView:
    status: SearchStatus
    query: str
    error: str
    snapshot: WeatherSnapshot | None
    unit: Unit
    favorites: list[WeatherSnapshot] = field(default_factory=list)
    notification: Notification | None = None
    notification_remaining: float = 0.0  # seconds until the notification expires

    @property
    def can_add_favorite(self) -> bool:
        return self.status == SearchStatus.SUCCESS and self.snapshot is not None

    @property
    def search_enabled(self) -> bool:
        return self.status != SearchStatus.SEARCHING

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "query": self.query,
            "error": self.error,
            "snapshot": self.snapshot.to_dict() if self.snapshot else None,
            "unit": self.unit.value,
            "unit_symbol": self.unit.symbol,
            "toggle_label": f"Switch to {self.unit.toggled().label}",
            "favorites": [f.to_dict() for f in self.favorites],
            "notification": (
                {
                    "message": self.notification.message,
                    "level": self.notification.level.value,
                    "remaining_seconds": round(self.notification_remaining, 3),
                }
                if self.notification
                else None
            ),
            "can_add_favorite": self.can_add_favorite,
            "search_enabled": self.search_enabled,
        }

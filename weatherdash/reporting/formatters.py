"""Output formatters for snapshots, favorites and dashboard views."""

import json

from weatherdash.models.dashboard import DashboardView
from weatherdash.models.weather import WeatherSnapshot


def format_temperature(s: WeatherSnapshot) -> str:
    # Labelled with the unit the snapshot was fetched in, not the current preference
    return f"{s.temp}° {s.unit.symbol}"


def format_snapshot_text(s: WeatherSnapshot) -> str:
    return f"{s.name} ({s.country})\nTemperature: {format_temperature(s)}"


def format_favorites_text(favorites: list[WeatherSnapshot]) -> str:
    if not favorites:
        return "No favorites yet"
    lines = [f"Favorites ({len(favorites)}):"]
    for s in favorites:
        lines.append(f"  {s.name} ({s.country}): {format_temperature(s)}")
    return "\n".join(lines)


def format_view_json(v: DashboardView) -> str:
    """JSON rendering for programmatic consumption."""
    return json.dumps(v.to_dict(), indent=2)

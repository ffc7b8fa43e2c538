"""Tests for output formatters."""

import json

from weatherdash.models.dashboard import DashboardView, SearchStatus
from weatherdash.models.weather import Unit, WeatherSnapshot
from weatherdash.reporting.formatters import (
    format_favorites_text,
    format_snapshot_text,
    format_view_json,
)


class TestFormatters:
    def test_snapshot_text(self, london: WeatherSnapshot):
        assert format_snapshot_text(london) == "London (GB)\nTemperature: 15° C"

    def test_favorites_keep_fetch_unit(self, london: WeatherSnapshot):
        hot = WeatherSnapshot("Phoenix", "US", 104, Unit.IMPERIAL)
        text = format_favorites_text([london, hot])
        assert "Favorites (2):" in text
        assert "London (GB): 15° C" in text
        assert "Phoenix (US): 104° F" in text

    def test_empty_favorites(self):
        assert format_favorites_text([]) == "No favorites yet"

    def test_view_json(self, london: WeatherSnapshot):
        v = DashboardView(SearchStatus.SUCCESS, "London", "", london, Unit.METRIC, [london])
        data = json.loads(format_view_json(v))
        assert data["snapshot"]["name"] == "London"
        assert data["can_add_favorite"] is True

"""Shared test fixtures."""

import json
import sqlite3
from pathlib import Path

import pytest
import yaml

from weatherdash.config.schema import ApiConfig, DashboardConfig, StorageConfig
from weatherdash.controller import DashboardController
from weatherdash.ingest.openweather_client import LookupFailed
from weatherdash.models.weather import Unit, WeatherSnapshot
from weatherdash.storage.database import open_storage
from weatherdash.stores.favorites_store import FavoritesStore
from weatherdash.stores.preference_store import PreferenceStore

FIXTURE_DIR = Path(__file__).parent / "fixtures"


class StubClient:
    """Weather client double: returns canned snapshots, records calls."""

    def __init__(self, results: dict[str, float] | None = None):
        self.results = results or {"London": 15}
        self.calls: list[tuple[str, Unit]] = []

    def lookup(self, place: str, unit: Unit) -> WeatherSnapshot:
        self.calls.append((place, unit))
        if place not in self.results:
            raise LookupFailed(place)
        return WeatherSnapshot(
            name=place, country="GB", temp=self.results[place], unit=unit
        )


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture
def db(db_path: Path) -> sqlite3.Connection:
    conn = open_storage(db_path)
    yield conn
    conn.close()


@pytest.fixture
def stub_client() -> StubClient:
    return StubClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def controller(
    db: sqlite3.Connection, stub_client: StubClient, clock: FakeClock
) -> DashboardController:
    return DashboardController(
        client=stub_client,
        favorites=FavoritesStore(db),
        preferences=PreferenceStore(db),
        clock=clock,
    )


@pytest.fixture
def london() -> WeatherSnapshot:
    return WeatherSnapshot(name="London", country="GB", temp=15, unit=Unit.METRIC)


@pytest.fixture
def paris() -> WeatherSnapshot:
    return WeatherSnapshot(name="Paris", country="FR", temp=18.5, unit=Unit.METRIC)


@pytest.fixture
def default_config(db_path: Path) -> DashboardConfig:
    return DashboardConfig(
        api=ApiConfig(api_key="test-key", base_url="https://test-owm.example.com"),
        storage=StorageConfig(db_path=str(db_path)),
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path, db_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {"api_key": "test-key", "base_url": "https://test-owm.example.com"},
        "storage": {"db_path": str(db_path)},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURE_DIR


@pytest.fixture
def london_response() -> dict:
    with open(FIXTURE_DIR / "owm_london_metric.json") as f:
        return json.load(f)

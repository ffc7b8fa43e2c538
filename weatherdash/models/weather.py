"""Weather lookup data models."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class Unit(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"

    @property
    def symbol(self) -> str:
        return "C" if self is Unit.METRIC else "F"

    @property
    def label(self) -> str:
        return "Celsius" if self is Unit.METRIC else "Fahrenheit"

    def toggled(self) -> "Unit":
        return Unit.IMPERIAL if self is Unit.METRIC else Unit.METRIC


@dataclass(frozen=True)
class WeatherSnapshot:
    """One successful lookup. `temp` is already converted to `unit`."""

    name: str
    country: str
    temp: float
    unit: Unit

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "country": self.country,
            "temp": self.temp,
            "unit": self.unit.value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "WeatherSnapshot":
        """Build a snapshot from its persisted form.

        Raises ValueError if a field is missing or has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected object, got {type(data).__name__}")
        name = data.get("name")
        country = data.get("country")
        temp = data.get("temp")
        if not isinstance(name, str) or not name:
            raise ValueError("snapshot name missing")
        if not isinstance(country, str):
            raise ValueError(f"snapshot {name!r} has no country")
        # bool is an int subclass
        if isinstance(temp, bool) or not isinstance(temp, (int, float)):
            raise ValueError(f"snapshot {name!r} has no numeric temp")
        return cls(name=name, country=country, temp=temp, unit=Unit(data.get("unit")))

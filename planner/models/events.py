"""Saved event and user settings models."""

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any

from planner.models.common import TemperatureUnit


class Favorability(StrEnum):
    MATCHES = "matches"
    WARMER = "warmer"
    COOLER = "cooler"


@dataclass(frozen=True)
class Settings:
    theme: str = "light"
    unit: TemperatureUnit = TemperatureUnit.CELSIUS

    def to_dict(self) -> dict[str, Any]:
        return {"theme": self.theme, "unit": str(self.unit)}


@dataclass(frozen=True)
class SavedEvent:
    id: str
    name: str
    date: str
    weather: str
    temperature_range: list[str]
    unit: str
    location: str
    favorability: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SavedEvent":
        """Build from stored JSON. Null or malformed fields read as empty."""
        temperature_range = data.get("temperatureRange")
        if not isinstance(temperature_range, list):
            temperature_range = []
        return cls(
            id="" if data.get("id") is None else str(data["id"]),
            name=data.get("name") or "",
            date=data.get("date") or "",
            weather=data.get("weather") or "",
            temperature_range=[str(v) for v in temperature_range if v is not None],
            unit=data.get("unit") or "C",
            location=data.get("location") or "",
            favorability=data.get("favorability"),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["temperatureRange"] = data.pop("temperature_range")
        return data


@dataclass(frozen=True)
class NewEvent:
    """User input for an event before it is assigned an id."""

    name: str
    date: str
    weather: str
    temperature_range_c: tuple[float, float]
    location: str


def convert_celsius(value: float, unit: str) -> float:
    """Convert a Celsius value into the given display unit."""
    if unit == TemperatureUnit.FAHRENHEIT:
        return value * 9 / 5 + 32
    if unit == TemperatureUnit.KELVIN:
        return value + 273.15
    return value


def to_celsius(value: float, unit: str) -> float:
    """Convert a value in the given unit to Celsius."""
    if unit == TemperatureUnit.FAHRENHEIT:
        return (value - 32) * 5 / 9
    if unit == TemperatureUnit.KELVIN:
        return value - 273.15
    return value

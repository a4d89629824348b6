"""Common types and helpers shared across models."""

from datetime import UTC, date, datetime
from enum import StrEnum


class ParameterName(StrEnum):
    TEMPERATURE = "temperature"
    PRECIPITATION = "precipitation"
    WIND_SPEED = "windSpeed"


class TemperatureUnit(StrEnum):
    CELSIUS = "C"
    FAHRENHEIT = "F"
    KELVIN = "K"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def today() -> date:
    return date.today()


def round2(value: float) -> float:
    return round(float(value), 2)

"""Weather query, observation and summary models."""

import math
import re
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from typing import Any

from planner.errors import ValidationError
from planner.models.common import ParameterName

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class Strategy(StrEnum):
    HISTORICAL = "historical"
    STANDARD = "standard"
    SEASONAL = "seasonal"
    PROJECTION = "projection"


class SummaryStatus(StrEnum):
    SUCCESS = "Success"
    ERROR = "Error"


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValidationError(f"Latitude {self.latitude} outside [-90, 90]")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValidationError(f"Longitude {self.longitude} outside [-180, 180]")


def validate_location_name(location_name: str | None) -> str:
    """Return the trimmed name or raise ValidationError."""
    name = (location_name or "").strip()
    if len(name) < 2 or re.fullmatch(r"[A-Za-z]", name):
        raise ValidationError(
            f'Location "{location_name}" is not a valid place name. '
            "Please enter a real city, country, or location."
        )
    return name


def parse_iso_date(value: str | None) -> date:
    """Parse a strict YYYY-MM-DD date or raise ValidationError."""
    if not value or not _ISO_DATE.match(value):
        raise ValidationError(f"Date {value!r} must use YYYY-MM-DD format")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Date {value!r} is not a calendar date") from e


@dataclass(frozen=True)
class WeatherQuery:
    location_name: str
    date: date

    @classmethod
    def parse(cls, location_name: str | None, date_str: str | None) -> "WeatherQuery":
        return cls(
            location_name=validate_location_name(location_name),
            date=parse_iso_date(date_str),
        )


@dataclass(frozen=True)
class WeatherObservation:
    parameter: ParameterName
    value: float | None
    unit: str
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "unit": self.unit, "label": self.label}


@dataclass(frozen=True)
class ProviderResponse:
    """Raw provider payload tagged with the adapter that understands it."""

    provider: str  # "nasa" | "meteomatics" | "projection"
    raw: dict


@dataclass(frozen=True)
class WeatherSummary:
    location: str
    date: str  # YYYY-MM-DD
    status: SummaryStatus
    latitude: float | None = None
    longitude: float | None = None
    provider_meta: dict[str, Any] = field(default_factory=dict)
    weather_conditions: dict[str, WeatherObservation] = field(default_factory=dict)
    forecast_source: str = ""
    strategy: Strategy | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == SummaryStatus.SUCCESS

    @property
    def temperature(self) -> float | None:
        obs = self.weather_conditions.get(ParameterName.TEMPERATURE)
        return obs.value if obs is not None else None

    @classmethod
    def error(
        cls,
        location: str,
        date_str: str,
        message: str,
        coordinate: Coordinate | None = None,
    ) -> "WeatherSummary":
        return cls(
            location=location,
            date=date_str,
            status=SummaryStatus.ERROR,
            latitude=coordinate.latitude if coordinate else None,
            longitude=coordinate.longitude if coordinate else None,
            message=message,
        )

    def to_dict(self) -> dict[str, Any]:
        query: dict[str, Any] = {"location": self.location, "date": self.date}
        if self.latitude is not None:
            query["latitude"] = self.latitude
            query["longitude"] = self.longitude
        if self.provider_meta:
            query["providerMeta"] = dict(self.provider_meta)
        data: dict[str, Any] = {"query": query, "status": str(self.status)}
        if self.weather_conditions:
            data["weatherConditions"] = {
                name: obs.to_dict() for name, obs in self.weather_conditions.items()
            }
        if self.forecast_source:
            data["forecastSource"] = self.forecast_source
        if self.message is not None:
            data["message"] = self.message
        return data


@dataclass(frozen=True)
class DesiredForecast:
    temperature: float
    condition: str
    humidity: float

    @classmethod
    def from_params(
        cls,
        temperature: str | None,
        condition: str | None,
        humidity: str | None,
    ) -> "DesiredForecast | None":
        """Build only when all three parameters are present."""
        if not temperature or not condition or not humidity:
            return None
        try:
            temp_value, humidity_value = float(temperature), float(humidity)
        except ValueError as e:
            raise ValidationError(
                f"Desired temperature and humidity must be numeric: {e}"
            ) from e
        if not (math.isfinite(temp_value) and math.isfinite(humidity_value)):
            raise ValidationError("Desired temperature and humidity must be finite")
        return cls(
            temperature=temp_value, condition=condition, humidity=humidity_value
        )

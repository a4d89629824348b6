"""Provider adapters: raw JSON -> normalized WeatherObservation maps.

All optional-field handling for provider payloads lives here. Values equal to
a provider's missing-data marker, absent values and non-numeric values become
None; everything else is rounded to 2 decimals, and temperatures are always
Celsius.
"""

import logging
import math
from datetime import date
from typing import Any

from planner.config.defaults import (
    METEOMATICS_MISSING_VALUES,
    NASA_FILL_VALUE,
    NASA_RAIN_PARAM,
    NASA_TEMP_PARAM,
    NASA_WIND_PARAM,
)
from planner.errors import ProviderError
from planner.ingest.nasa_client import nasa_date_key
from planner.models.common import ParameterName, round2
from planner.models.weather import ProviderResponse, WeatherObservation

logger = logging.getLogger(__name__)

_METEOMATICS_NAMES = {
    "t_2m": ParameterName.TEMPERATURE,
    "precip_24h": ParameterName.PRECIPITATION,
    "wind_speed_10m": ParameterName.WIND_SPEED,
}

_UNIT_LABELS = {"ms": "m/s", "mm": "mm", "kmh": "km/h"}

_LABEL_PREFIX = {"meteomatics": "Forecasted", "projection": "Projected"}

_DEFAULT_UNITS = {
    ParameterName.TEMPERATURE: "C",
    ParameterName.PRECIPITATION: "mm",
    ParameterName.WIND_SPEED: "m/s",
}

_LABEL_NOUN = {
    ParameterName.TEMPERATURE: "Temperature",
    ParameterName.PRECIPITATION: "Precipitation",
    ParameterName.WIND_SPEED: "Wind Speed",
}


def clean_value(value: Any, missing: tuple[float, ...] = (NASA_FILL_VALUE,)) -> float | None:
    """Return a rounded float, or None for sentinels and unusable input."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number) or number in missing:
        return None
    return round2(number)


def temperature_to_celsius(value: float | None, unit: str) -> float | None:
    if value is None:
        return None
    unit = unit.upper()
    if unit == "F":
        return round2((value - 32) * 5 / 9)
    if unit == "K":
        return round2(value - 273.15)
    return value


def normalize_nasa(response: ProviderResponse, day: date) -> dict[str, WeatherObservation]:
    raw = response.raw
    header = raw.get("header") or {}
    fill_value = clean_value(header.get("fill_value"), ())
    missing = (NASA_FILL_VALUE,) if fill_value is None else (fill_value, NASA_FILL_VALUE)
    properties = raw.get("properties") or raw
    parameters = properties.get("parameter") or {}
    key = nasa_date_key(day)

    def _value(param: str) -> float | None:
        series = parameters.get(param) or {}
        return clean_value(series.get(key), missing)

    return {
        ParameterName.TEMPERATURE: WeatherObservation(
            ParameterName.TEMPERATURE,
            _value(NASA_TEMP_PARAM),
            "C",
            "Average Historical Temperature",
        ),
        ParameterName.PRECIPITATION: WeatherObservation(
            ParameterName.PRECIPITATION,
            _value(NASA_RAIN_PARAM),
            "mm/day",
            "Total Historical Rainfall",
        ),
        ParameterName.WIND_SPEED: WeatherObservation(
            ParameterName.WIND_SPEED,
            _value(NASA_WIND_PARAM),
            "m/s",
            "Average Historical Wind Speed",
        ),
    }


def _first_value(entry: dict) -> Any:
    coordinates = entry.get("coordinates") or []
    if not coordinates:
        return None
    dates = coordinates[0].get("dates") or []
    if not dates:
        return None
    return dates[0].get("value")


def normalize_meteomatics(response: ProviderResponse) -> dict[str, WeatherObservation]:
    prefix = _LABEL_PREFIX.get(response.provider, "Forecasted")
    found: dict[str, WeatherObservation] = {}
    for entry in response.raw.get("data") or []:
        param = entry.get("parameter", "")
        base, _, unit = param.partition(":")
        name = _METEOMATICS_NAMES.get(base)
        if name is None:
            logger.debug("Ignoring Meteomatics parameter %s", param)
            continue
        value = clean_value(_first_value(entry), METEOMATICS_MISSING_VALUES)
        if name == ParameterName.TEMPERATURE:
            value = temperature_to_celsius(value, unit or "C")
            unit = "C"
        found[name] = WeatherObservation(
            name,
            value,
            _UNIT_LABELS.get(unit, unit) or _DEFAULT_UNITS[name],
            f"{prefix} {_LABEL_NOUN[name]}",
        )

    # Parameters the provider omitted are reported as missing, not dropped
    for name, noun in _LABEL_NOUN.items():
        if name not in found:
            found[name] = WeatherObservation(
                name, None, _DEFAULT_UNITS[name], f"{prefix} {noun}"
            )
    return found


def normalize(response: ProviderResponse, day: date) -> dict[str, WeatherObservation]:
    """Dispatch a tagged provider response to its adapter."""
    if response.provider == "nasa":
        return normalize_nasa(response, day)
    if response.provider in ("meteomatics", "projection"):
        return normalize_meteomatics(response)
    raise ProviderError(f"No adapter for provider {response.provider!r}")

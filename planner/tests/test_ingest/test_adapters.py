"""Tests for provider payload normalization."""

import math
from datetime import date

import pytest

from planner.errors import ProviderError
from planner.ingest.adapters import (
    clean_value,
    normalize,
    normalize_meteomatics,
    normalize_nasa,
    temperature_to_celsius,
)
from planner.models.common import ParameterName
from planner.models.weather import ProviderResponse


class TestCleanValue:
    @pytest.mark.parametrize(
        "raw",
        [None, -999, -999.0, "abc", float("nan"), math.inf, True, {"v": 1}],
    )
    def test_unusable_becomes_none(self, raw):
        assert clean_value(raw) is None

    def test_rounds_to_two_decimals(self):
        assert clean_value(14.237) == 14.24
        assert clean_value("3.456") == 3.46

    def test_zero_kept(self):
        assert clean_value(0) == 0.0

    def test_custom_missing_values(self):
        assert clean_value(-666, (-999.0, -666.0)) is None


class TestTemperatureToCelsius:
    def test_fahrenheit(self):
        assert temperature_to_celsius(212.0, "F") == 100.0

    def test_kelvin(self):
        assert temperature_to_celsius(273.15, "K") == 0.0

    def test_celsius_passthrough(self):
        assert temperature_to_celsius(21.5, "C") == 21.5

    def test_none(self):
        assert temperature_to_celsius(None, "F") is None


class TestNormalizeNasa:
    def test_values_and_fill(self, load_json):
        response = ProviderResponse("nasa", load_json("nasa_daily_sf.json"))
        obs = normalize_nasa(response, date(2025, 10, 19))

        temp = obs[ParameterName.TEMPERATURE]
        assert temp.value == 14.24
        assert temp.unit == "C"
        assert temp.label == "Average Historical Temperature"
        assert obs[ParameterName.PRECIPITATION].value is None
        assert obs[ParameterName.PRECIPITATION].unit == "mm/day"
        assert obs[ParameterName.WIND_SPEED].value == 3.46

    def test_date_absent_gives_none(self, load_json):
        response = ProviderResponse("nasa", load_json("nasa_daily_sf.json"))
        obs = normalize_nasa(response, date(2025, 10, 20))
        assert all(o.value is None for o in obs.values())

    def test_null_fill_value_uses_default(self, load_json):
        raw = load_json("nasa_daily_sf.json")
        raw["header"]["fill_value"] = None
        obs = normalize_nasa(ProviderResponse("nasa", raw), date(2025, 10, 19))

        assert obs[ParameterName.TEMPERATURE].value == 14.24
        assert obs[ParameterName.PRECIPITATION].value is None

    def test_custom_fill_value(self):
        raw = {
            "header": {"fill_value": -9999},
            "properties": {"parameter": {"T2M": {"20251019": -9999}}},
        }
        obs = normalize_nasa(ProviderResponse("nasa", raw), date(2025, 10, 19))
        assert obs[ParameterName.TEMPERATURE].value is None

    def test_empty_payload(self):
        obs = normalize_nasa(ProviderResponse("nasa", {}), date(2025, 10, 19))
        assert set(obs) == set(ParameterName)
        assert obs[ParameterName.TEMPERATURE].value is None


class TestNormalizeMeteomatics:
    def test_forecast(self, load_json):
        response = ProviderResponse("meteomatics", load_json("meteomatics_forecast.json"))
        obs = normalize_meteomatics(response)

        assert obs[ParameterName.TEMPERATURE].value == 18.46
        assert obs[ParameterName.TEMPERATURE].label == "Forecasted Temperature"
        assert obs[ParameterName.PRECIPITATION].value == 0.0
        assert obs[ParameterName.PRECIPITATION].unit == "mm"
        assert obs[ParameterName.WIND_SPEED].value is None
        assert obs[ParameterName.WIND_SPEED].unit == "m/s"

    def test_projection_labels(self, load_json):
        response = ProviderResponse("projection", load_json("meteomatics_forecast.json"))
        obs = normalize_meteomatics(response)
        assert obs[ParameterName.TEMPERATURE].label == "Projected Temperature"

    def test_fahrenheit_converted(self):
        raw = {
            "data": [
                {
                    "parameter": "t_2m:F",
                    "coordinates": [{"dates": [{"value": 68.0}]}],
                }
            ]
        }
        obs = normalize_meteomatics(ProviderResponse("meteomatics", raw))
        assert obs[ParameterName.TEMPERATURE].value == 20.0
        assert obs[ParameterName.TEMPERATURE].unit == "C"

    def test_omitted_parameters_reported_missing(self):
        obs = normalize_meteomatics(ProviderResponse("meteomatics", {"data": []}))
        assert set(obs) == set(ParameterName)
        assert all(o.value is None for o in obs.values())
        assert obs[ParameterName.PRECIPITATION].unit == "mm"

    def test_unknown_parameter_ignored(self):
        raw = {
            "data": [
                {
                    "parameter": "relative_humidity_2m:p",
                    "coordinates": [{"dates": [{"value": 55}]}],
                }
            ]
        }
        obs = normalize_meteomatics(ProviderResponse("meteomatics", raw))
        assert set(obs) == set(ParameterName)


class TestNormalizeDispatch:
    def test_unknown_provider(self):
        with pytest.raises(ProviderError):
            normalize(ProviderResponse("mystery", {}), date(2025, 1, 1))

    def test_dispatches_nasa(self, load_json):
        obs = normalize(
            ProviderResponse("nasa", load_json("nasa_daily_sf.json")),
            date(2025, 10, 19),
        )
        assert obs[ParameterName.TEMPERATURE].value == 14.24

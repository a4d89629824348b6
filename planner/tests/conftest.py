"""Shared test fixtures."""

import json
import sqlite3
from datetime import date
from pathlib import Path

import pytest
import yaml

from planner.config.schema import PlannerConfig
from planner.models.common import ParameterName
from planner.models.weather import (
    Coordinate,
    Strategy,
    SummaryStatus,
    WeatherObservation,
    WeatherSummary,
)
from planner.storage.database import open_database

FIXTURE_DIR = Path(__file__).parent / "fixtures"
TODAY = date(2026, 10, 19)
SF = Coordinate(latitude=37.7749, longitude=-122.4194)


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def load_fixture(name: str):
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


def make_summary(temperature: float | None = 20.0, **overrides) -> WeatherSummary:
    fields = {
        "location": "San Francisco",
        "date": TODAY.isoformat(),
        "status": SummaryStatus.SUCCESS,
        "latitude": SF.latitude,
        "longitude": SF.longitude,
        "weather_conditions": {
            ParameterName.TEMPERATURE: WeatherObservation(
                ParameterName.TEMPERATURE, temperature, "C", "Forecasted Temperature"
            ),
        },
        "forecast_source": "Meteomatics (Standard Forecast)",
        "strategy": Strategy.STANDARD,
    }
    fields.update(overrides)
    return WeatherSummary(**fields)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def sf() -> Coordinate:
    return SF


@pytest.fixture
def summary_factory():
    return make_summary


@pytest.fixture
def load_json():
    return load_fixture


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def default_config() -> PlannerConfig:
    return PlannerConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "routing": {"short_term_days": 10, "seasonal_days": 180},
        "rate_limit": {"max_requests_per_minute": 20},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def tmp_db(tmp_path: Path) -> sqlite3.Connection:
    """Temporary SQLite database with the planner schema in place."""
    conn = open_database(tmp_path / "test.db")
    yield conn
    conn.close()

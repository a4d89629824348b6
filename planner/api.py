"""Weather event planner HTTP API (FastAPI)."""

import logging
import os
import sqlite3
from functools import lru_cache
from typing import Literal

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from planner.config.loader import load_config
from planner.config.schema import PlannerConfig
from planner.errors import ValidationError
from planner.models.common import TemperatureUnit
from planner.models.common import today as local_today
from planner.models.events import NewEvent, Settings, to_celsius
from planner.models.weather import DesiredForecast, parse_iso_date
from planner.pipeline.explain_pipeline import (
    ExplainPipeline,
    build_pipeline,
    build_session,
)
from planner.session.orchestrator import MapSession, SelectionStatus
from planner.storage import events_repo, settings_repo
from planner.storage.database import open_database

logger = logging.getLogger(__name__)

CONFIG_PATH = os.environ.get("PLANNER_CONFIG", "config/planner.yaml")
DB_PATH = os.environ.get("PLANNER_DB", "data/planner.db")
DEFAULT_DESIRED_HUMIDITY = 50.0

_SELECTION_HTTP_STATUS = {
    SelectionStatus.BUSY: 409,
    SelectionStatus.RATE_LIMITED: 429,
    SelectionStatus.ERROR: 500,
    SelectionStatus.CANCELLED: 503,
}

app = FastAPI(title="Weather Event Planner", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache
def get_config() -> PlannerConfig:
    return load_config(CONFIG_PATH)


@lru_cache
def get_pipeline() -> ExplainPipeline:
    return build_pipeline(get_config())


@lru_cache
def get_session() -> MapSession:
    return build_session(get_config())


def _conn() -> sqlite3.Connection:
    return open_database(DB_PATH)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.get("/")
def root():
    return {"message": "Weather API Server is running!"}


# ── Weather ─────────────────────────────────────────────────────


@app.get("/api/weather/explain")
def explain_weather(
    location: str | None = None,
    date: str | None = None,
    desired_temp: str | None = Query(None, alias="desiredTemp"),
    desired_condition: str | None = Query(None, alias="desiredCondition"),
    desired_humidity: str | None = Query(None, alias="desiredHumidity"),
    pipeline: ExplainPipeline = Depends(get_pipeline),
):
    """Explain the expected weather, and compare it with the desired forecast
    when desiredTemp, desiredCondition and desiredHumidity are all given."""
    if not location or not date:
        return _error(400, "Missing location or date")
    try:
        desired = DesiredForecast.from_params(
            desired_temp, desired_condition, desired_humidity
        )
        result = pipeline.run(location, date, desired)
    except ValidationError as e:
        return _error(400, str(e))
    except Exception:
        logger.exception("Weather route error")
        return _error(500, "Internal server error")

    if not result.summary.ok:
        return JSONResponse(status_code=500, content=result.summary.to_dict())
    return result.to_response()


# ── Map ─────────────────────────────────────────────────────────


@app.get("/api/map/select")
async def select_map_location(
    lat: float,
    lon: float,
    date: str | None = None,
    session: MapSession = Depends(get_session),
):
    """Weather for a tapped map point, throttled and cached per session."""
    try:
        day = parse_iso_date(date) if date else local_today()
        outcome = await session.select_location(lat, lon, day)
    except ValidationError as e:
        return _error(400, str(e))
    return JSONResponse(
        status_code=_SELECTION_HTTP_STATUS.get(outcome.status, 200),
        content=outcome.to_dict(),
    )


# ── Events ──────────────────────────────────────────────────────


class EventIn(BaseModel):
    name: str = Field(min_length=1)
    date: str
    weather: str = ""
    temperature_range: tuple[float, float] = Field(alias="temperatureRange")
    location: str = ""


@app.get("/api/events")
def get_events():
    conn = _conn()
    try:
        return [e.to_dict() for e in events_repo.list_events(conn)]
    finally:
        conn.close()


@app.post("/api/events", status_code=201)
def create_event(event: EventIn):
    """Save an event. temperatureRange is given in Celsius."""
    conn = _conn()
    try:
        unit = settings_repo.load_settings(conn).unit
        saved = events_repo.add_event(
            conn,
            NewEvent(
                name=event.name,
                date=event.date,
                weather=event.weather,
                temperature_range_c=event.temperature_range,
                location=event.location,
            ),
            unit=unit,
        )
        return saved.to_dict()
    finally:
        conn.close()


@app.delete("/api/events/{event_id}")
def remove_event(event_id: str):
    conn = _conn()
    try:
        if not events_repo.delete_event(conn, event_id):
            raise HTTPException(404, "Event not found")
        return {"status": "deleted", "id": event_id}
    finally:
        conn.close()


@app.post("/api/events/{event_id}/favorability")
def evaluate_event(
    event_id: str,
    pipeline: ExplainPipeline = Depends(get_pipeline),
):
    """Score a saved event against the expected weather and store the verdict."""
    conn = _conn()
    try:
        event = next(
            (e for e in events_repo.list_events(conn) if e.id == event_id), None
        )
        if event is None:
            raise HTTPException(404, "Event not found")
        try:
            low, high = (
                to_celsius(float(v), event.unit) for v in event.temperature_range
            )
            desired = DesiredForecast(
                temperature=(low + high) / 2,
                condition=event.weather or "sunny",
                humidity=DEFAULT_DESIRED_HUMIDITY,
            )
            result = pipeline.run(event.location, event.date, desired)
        except ValidationError as e:
            return _error(400, str(e))
        except ValueError:
            return _error(400, "Event has no usable temperature range")

        if not result.summary.ok:
            return JSONResponse(status_code=500, content=result.summary.to_dict())
        verdict = str(result.favorability) if result.favorability else None
        updated = events_repo.set_favorability(conn, event_id, verdict)
        return {
            "event": updated.to_dict() if updated else event.to_dict(),
            **result.to_response(),
        }
    finally:
        conn.close()


# ── Settings ────────────────────────────────────────────────────


class SettingsIn(BaseModel):
    theme: str | None = None
    unit: Literal["C", "F", "K"] | None = None


@app.get("/api/settings")
def get_settings():
    conn = _conn()
    try:
        return settings_repo.load_settings(conn).to_dict()
    finally:
        conn.close()


@app.put("/api/settings")
def update_settings(update: SettingsIn):
    conn = _conn()
    try:
        current = settings_repo.load_settings(conn)
        new = Settings(
            theme=update.theme or current.theme,
            unit=TemperatureUnit(update.unit) if update.unit else current.unit,
        )
        settings_repo.save_settings(conn, new)
        return new.to_dict()
    finally:
        conn.close()


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(app, host=config.server.host, port=config.server.port)

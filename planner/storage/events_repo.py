"""Repository for saved events, stored as one JSON array under "events"."""

import json
import logging
import sqlite3
import time

from planner.models.events import NewEvent, SavedEvent, convert_celsius
from planner.storage import kv_repo

logger = logging.getLogger(__name__)

EVENTS_KEY = "events"


def list_events(conn: sqlite3.Connection) -> list[SavedEvent]:
    """All saved events. Absent or unreadable data yields an empty list."""
    raw = kv_repo.get_value(conn, EVENTS_KEY)
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Stored events are not valid JSON, ignoring them")
        return []
    if not isinstance(data, list):
        return []
    return [SavedEvent.from_dict(item) for item in data if isinstance(item, dict)]


def _save_events(conn: sqlite3.Connection, events: list[SavedEvent]) -> None:
    kv_repo.set_value(conn, EVENTS_KEY, json.dumps([e.to_dict() for e in events]))


def add_event(
    conn: sqlite3.Connection,
    new: NewEvent,
    unit: str = "C",
    event_id: str | None = None,
) -> SavedEvent:
    """Append an event; the temperature range is stored in the user's unit."""
    event = SavedEvent(
        id=event_id or str(int(time.time() * 1000)),
        name=new.name,
        date=new.date,
        weather=new.weather,
        temperature_range=[
            f"{convert_celsius(v, unit):.1f}" for v in new.temperature_range_c
        ],
        unit=unit,
        location=new.location,
    )
    _save_events(conn, [*list_events(conn), event])
    return event


def delete_event(conn: sqlite3.Connection, event_id: str) -> bool:
    events = list_events(conn)
    remaining = [e for e in events if e.id != event_id]
    if len(remaining) == len(events):
        return False
    _save_events(conn, remaining)
    return True


def set_favorability(
    conn: sqlite3.Connection, event_id: str, favorability: str | None
) -> SavedEvent | None:
    events = list_events(conn)
    updated: SavedEvent | None = None
    result = []
    for e in events:
        if e.id == event_id:
            data = e.to_dict()
            data["favorability"] = favorability
            e = SavedEvent.from_dict(data)
            updated = e
        result.append(e)
    if updated is not None:
        _save_events(conn, result)
    return updated

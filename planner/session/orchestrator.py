"""Map session: turns a location tap into one guarded data lookup.

One MapSession exists per map instance and owns its rate limiter, result
cache and in-flight flag. Steps for a tap, each short-circuiting:

1. ignore the tap while another lookup is in flight
2. rate limiter denial -> "please wait" notice, nothing else touched
3. cache hit -> use the cached payload
4. cache miss -> record the request, await the data operation
5. store the payload in the cache (even if the session closed meanwhile)
6. session closed while awaiting -> drop the result
7. notify the location callback on hit and miss alike
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any

from planner.ingest.geocoder import NominatimGeocoder
from planner.models.weather import Coordinate
from planner.routing.router import WeatherRouter
from planner.session.rate_limiter import RateLimiter
from planner.session.result_cache import ResultCache, cache_key

logger = logging.getLogger(__name__)

RATE_LIMIT_NOTICE = (
    "Too many requests. Please wait a moment before selecting another location."
)
DATA_ERROR_NOTICE = (
    "Unable to fetch weather data. This may be due to network issues or "
    "service limitations."
)

Fetcher = Callable[[Coordinate, date], Awaitable[Any]]


class SelectionStatus(StrEnum):
    OK = "ok"
    CACHED = "cached"
    BUSY = "busy"
    RATE_LIMITED = "rate_limited"
    CANCELLED = "cancelled"
    ERROR = "error"


@dataclass(frozen=True)
class SelectionOutcome:
    status: SelectionStatus
    coordinate: Coordinate | None = None
    payload: Any = None
    notice: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"status": str(self.status)}
        if self.coordinate is not None:
            data["latitude"] = self.coordinate.latitude
            data["longitude"] = self.coordinate.longitude
        if self.notice:
            data["notice"] = self.notice
        if self.payload is not None:
            data["summary"] = (
                self.payload.to_dict() if hasattr(self.payload, "to_dict") else self.payload
            )
        return data


def coordinate_label(coordinate: Coordinate) -> str:
    return f"Lat:{coordinate.latitude}, Lon:{coordinate.longitude}"


def router_fetcher(
    router: WeatherRouter, geocoder: NominatimGeocoder | None = None
) -> Fetcher:
    """Adapt the synchronous router so it runs off the event loop.

    With a geocoder the tapped point is named by reverse geocoding, otherwise
    by its raw coordinates.
    """

    def lookup(coordinate: Coordinate, day: date) -> Any:
        if geocoder is None:
            name = coordinate_label(coordinate)
        else:
            name = geocoder.reverse(coordinate.latitude, coordinate.longitude)
        return router.summarize(coordinate, name, day)

    async def fetch(coordinate: Coordinate, day: date) -> Any:
        return await asyncio.to_thread(lookup, coordinate, day)

    return fetch


def _cacheable(payload: Any) -> bool:
    # Error summaries are returned as data but must not pin a failure
    return getattr(payload, "ok", True) is not False


class MapSession:
    def __init__(
        self,
        fetch: Fetcher,
        rate_limiter: RateLimiter | None = None,
        cache: ResultCache | None = None,
        on_location_selected: Callable[[Coordinate], None] | None = None,
    ):
        self.fetch = fetch
        self.rate_limiter = rate_limiter or RateLimiter()
        self.cache = cache or ResultCache()
        self.on_location_selected = on_location_selected
        self._in_flight = False
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def busy(self) -> bool:
        return self._in_flight

    async def select_location(
        self, latitude: float, longitude: float, day: date
    ) -> SelectionOutcome:
        if not self._alive:
            return SelectionOutcome(SelectionStatus.CANCELLED)
        if self._in_flight:
            logger.debug("Ignoring tap while a lookup is in flight")
            return SelectionOutcome(SelectionStatus.BUSY)

        coordinate = Coordinate(latitude=latitude, longitude=longitude)
        if not self.rate_limiter.can_make_request():
            logger.info("Rate limited tap at %s", coordinate)
            return SelectionOutcome(
                SelectionStatus.RATE_LIMITED, coordinate, notice=RATE_LIMIT_NOTICE
            )

        self._in_flight = True
        try:
            key = cache_key(latitude, longitude, day)
            status = SelectionStatus.CACHED
            if key in self.cache:
                payload = self.cache.get(key)
            else:
                status = SelectionStatus.OK
                self.rate_limiter.record_request()
                try:
                    payload = await self.fetch(coordinate, day)
                except Exception:
                    logger.exception("Lookup failed for %s on %s", coordinate, day)
                    if not self._alive:
                        return SelectionOutcome(SelectionStatus.CANCELLED, coordinate)
                    return SelectionOutcome(
                        SelectionStatus.ERROR, coordinate, notice=DATA_ERROR_NOTICE
                    )
                if _cacheable(payload):
                    self.cache.put(key, payload)

            if not self._alive:
                logger.debug("Session closed during lookup, dropping result")
                return SelectionOutcome(SelectionStatus.CANCELLED, coordinate)

            if self.on_location_selected is not None:
                self.on_location_selected(coordinate)
            return SelectionOutcome(status, coordinate, payload)
        finally:
            self._in_flight = False

    def on_app_state_change(self, state: str) -> None:
        """Drop throttling state and cached lookups when the app backgrounds."""
        if state == "background":
            logger.info("App backgrounded, resetting rate limiter and cache")
            self.rate_limiter.reset()
            self.cache.clear()

    def close(self) -> None:
        """Mark the owning view torn down; in-flight results are discarded."""
        self._alive = False
        self.rate_limiter.reset()

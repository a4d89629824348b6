"""Nominatim (OpenStreetMap) forward and reverse geocoding."""

import logging

from planner.errors import GeocodingError
from planner.ingest.http import get_json
from planner.models.weather import Coordinate, validate_location_name

logger = logging.getLogger(__name__)

NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
DEFAULT_USER_AGENT = "weather-planner/0.1.0"

_PLACE_KEYS = ("city", "town", "village", "county", "state", "country")


class NominatimGeocoder:
    def __init__(
        self,
        base_url: str = NOMINATIM_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 5.0,
        max_retries: int = 1,
        retry_base_delay: float = 0.5,
    ):
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def _get(self, endpoint: str, params: dict) -> dict | list:
        return get_json(
            f"{self.base_url}{endpoint}",
            provider="Nominatim",
            params=params,
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
            max_retries=self.max_retries,
            retry_base_delay=self.retry_base_delay,
            error_cls=GeocodingError,
        )

    def geocode(self, location_name: str) -> Coordinate:
        """Resolve a place name to coordinates.

        Raises ValidationError for malformed names (no request is made) and
        GeocodingError when the lookup fails or finds nothing.
        """
        name = validate_location_name(location_name)
        data = self._get("/search", {"q": name, "format": "json", "limit": 1})
        if not isinstance(data, list) or not data:
            raise GeocodingError(
                f"Sorry, I couldn't find \"{name}\". "
                "Please check the spelling and try a different location."
            )
        try:
            coordinate = Coordinate(
                latitude=float(data[0]["lat"]), longitude=float(data[0]["lon"])
            )
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingError(f"Malformed geocoding result for {name!r}") from e
        logger.info("Resolved %s to %s", name, coordinate)
        return coordinate

    def reverse(self, latitude: float, longitude: float) -> str:
        """Best-effort place name for a coordinate. Never raises."""
        fallback = f"Location ({latitude:.4f}, {longitude:.4f})"
        try:
            data = self._get(
                "/reverse",
                {
                    "lat": latitude,
                    "lon": longitude,
                    "format": "json",
                    "addressdetails": 1,
                },
            )
        except GeocodingError as e:
            logger.warning("Reverse geocoding failed: %s", e)
            return fallback

        address = data.get("address") if isinstance(data, dict) else None
        if not address:
            return "Unknown Location"
        place = next(
            (address[k] for k in _PLACE_KEYS if address.get(k)), "Unknown Location"
        )
        country = address.get("country")
        if country and place != country:
            return f"{place}, {country}"
        return place

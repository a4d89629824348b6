"""NASA POWER daily point API client (historical archive)."""

import logging
from datetime import date

from planner.config.defaults import (
    NASA_COMMUNITY,
    NASA_RAIN_PARAM,
    NASA_TEMP_PARAM,
    NASA_WIND_PARAM,
)
from planner.errors import ProviderError
from planner.ingest.http import get_json
from planner.models.weather import Coordinate, ProviderResponse

logger = logging.getLogger(__name__)

NASA_POWER_URL = "https://power.larc.nasa.gov/api/temporal/daily/point"
DEFAULT_PARAMETERS = (NASA_TEMP_PARAM, NASA_RAIN_PARAM, NASA_WIND_PARAM)


def nasa_date_key(day: date) -> str:
    return day.strftime("%Y%m%d")


class NasaPowerClient:
    def __init__(
        self,
        base_url: str = NASA_POWER_URL,
        timeout: float = 5.0,
        max_retries: int = 1,
        retry_base_delay: float = 0.5,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def get_daily(
        self,
        coordinate: Coordinate,
        day: date,
        parameters: tuple[str, ...] = DEFAULT_PARAMETERS,
    ) -> ProviderResponse:
        """Fetch one day of daily values for a point.

        The archive lags a few days behind today; recent days come back as
        fill values, which the adapter turns into None.
        """
        key = nasa_date_key(day)
        params = {
            "latitude": coordinate.latitude,
            "longitude": coordinate.longitude,
            "start": key,
            "end": key,
            "parameters": ",".join(parameters),
            "community": NASA_COMMUNITY,
            "format": "JSON",
        }
        logger.info(
            "Fetching NASA POWER lat=%s lon=%s date=%s",
            coordinate.latitude, coordinate.longitude, key,
        )
        raw = get_json(
            self.base_url,
            provider="NASA POWER",
            params=params,
            timeout=self.timeout,
            max_retries=self.max_retries,
            retry_base_delay=self.retry_base_delay,
        )
        if not isinstance(raw, dict):
            raise ProviderError("NASA POWER returned an unexpected payload")
        return ProviderResponse(provider="nasa", raw=raw)

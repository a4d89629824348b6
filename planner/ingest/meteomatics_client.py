"""Meteomatics REST client for forecasts and climate projections."""

import logging
import os
from datetime import date

from planner.config.defaults import (
    METEOMATICS_RAIN_PARAM,
    METEOMATICS_TEMP_PARAM,
    METEOMATICS_WIND_PARAM,
)
from planner.errors import ProviderError
from planner.ingest.http import get_json
from planner.models.weather import Coordinate, ProviderResponse

logger = logging.getLogger(__name__)

METEOMATICS_BASE_URL = "https://api.meteomatics.com"
DEFAULT_PARAMETERS = (
    METEOMATICS_TEMP_PARAM,
    METEOMATICS_RAIN_PARAM,
    METEOMATICS_WIND_PARAM,
)


class MeteomaticsClient:
    """Thin wrapper around the Meteomatics time-series endpoint.

    Credentials come from METEOMATICS_USERNAME / METEOMATICS_PASSWORD unless
    passed explicitly. Missing credentials fail at request time so a router
    can still fall back to another provider.
    """

    def __init__(
        self,
        username: str | None = None,
        password: str | None = None,
        base_url: str = METEOMATICS_BASE_URL,
        timeout: float = 5.0,
        max_retries: int = 1,
        retry_base_delay: float = 0.5,
    ):
        self.username = username or os.environ.get("METEOMATICS_USERNAME", "")
        self.password = password or os.environ.get("METEOMATICS_PASSWORD", "")
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def _auth(self) -> tuple[str, str]:
        if not self.username or not self.password:
            raise ProviderError("Meteomatics credentials not configured")
        return (self.username, self.password)

    def _get_point(
        self,
        coordinate: Coordinate,
        day: date,
        model: str,
        parameters: tuple[str, ...],
    ) -> dict:
        auth = self._auth()
        url = (
            f"{self.base_url}/{day.isoformat()}T12:00:00Z/{','.join(parameters)}/"
            f"{coordinate.latitude},{coordinate.longitude}/json"
        )
        raw = get_json(
            url,
            provider="Meteomatics",
            params={"model": model},
            headers={"Accept": "application/json"},
            auth=auth,
            timeout=self.timeout,
            max_retries=self.max_retries,
            retry_base_delay=self.retry_base_delay,
        )
        if not isinstance(raw, dict):
            raise ProviderError("Meteomatics returned an unexpected payload")
        return raw

    def get_forecast(
        self,
        coordinate: Coordinate,
        day: date,
        model: str = "mix",
        parameters: tuple[str, ...] = DEFAULT_PARAMETERS,
    ) -> ProviderResponse:
        logger.info("Fetching Meteomatics forecast model=%s date=%s", model, day)
        raw = self._get_point(coordinate, day, model, parameters)
        return ProviderResponse(provider="meteomatics", raw=raw)

    def get_projection(
        self,
        coordinate: Coordinate,
        day: date,
        scenario: str = "mri-esm2-ssp585",
        parameters: tuple[str, ...] = DEFAULT_PARAMETERS,
    ) -> ProviderResponse:
        logger.info("Fetching Meteomatics projection scenario=%s date=%s", scenario, day)
        raw = self._get_point(coordinate, day, scenario, parameters)
        return ProviderResponse(provider="projection", raw=raw)

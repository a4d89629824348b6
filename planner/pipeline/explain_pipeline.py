"""Explain pipeline: validate -> geocode -> route -> explain (+ compare).

Also wires clients and the map session from config.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from planner.config.schema import PlannerConfig
from planner.errors import GeocodingError
from planner.explain.ai_client import GeminiClient
from planner.explain.service import ExplanationService, favorability
from planner.ingest.geocoder import NominatimGeocoder
from planner.ingest.meteomatics_client import MeteomaticsClient
from planner.ingest.nasa_client import NasaPowerClient
from planner.models.events import Favorability
from planner.models.weather import (
    Coordinate,
    DesiredForecast,
    WeatherQuery,
    WeatherSummary,
)
from planner.routing.router import WeatherRouter
from planner.session.orchestrator import MapSession, router_fetcher
from planner.session.rate_limiter import RateLimiter
from planner.session.result_cache import ResultCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExplainResult:
    summary: WeatherSummary
    explanation: str | None = None
    comparison: str | None = None
    favorability: Favorability | None = None

    def to_response(self) -> dict:
        return {"aiExplanation": self.explanation, "aiComparison": self.comparison}


class ExplainPipeline:
    def __init__(
        self,
        geocoder: NominatimGeocoder,
        router: WeatherRouter,
        explainer: ExplanationService,
    ):
        self.geocoder = geocoder
        self.router = router
        self.explainer = explainer

    def summarize(self, query: WeatherQuery) -> WeatherSummary:
        """Geocode and route. Provider failures come back as an Error summary."""
        date_str = query.date.isoformat()
        try:
            coordinate = self.geocoder.geocode(query.location_name)
        except GeocodingError as e:
            logger.warning("Geocoding failed for %s: %s", query.location_name, e)
            return WeatherSummary.error(
                query.location_name,
                date_str,
                f"Failed to retrieve weather data. {e}",
            )
        return self.router.summarize(coordinate, query.location_name, query.date)

    def run(
        self,
        location: str | None,
        date_str: str | None,
        desired: DesiredForecast | None = None,
    ) -> ExplainResult:
        """Raises ValidationError for malformed input before any network call."""
        query = WeatherQuery.parse(location, date_str)
        summary = self.summarize(query)
        if not summary.ok:
            return ExplainResult(summary=summary)

        explanation = self.explainer.explain(summary)
        comparison = None
        verdict = None
        if desired is not None:
            comparison = self.explainer.compare(desired, summary)
            verdict = favorability(desired, summary)
        return ExplainResult(summary, explanation, comparison, verdict)


def build_geocoder(config: PlannerConfig) -> NominatimGeocoder:
    p = config.providers
    return NominatimGeocoder(
        base_url=p.nominatim_base_url,
        user_agent=p.user_agent,
        timeout=p.timeout_seconds,
        max_retries=p.max_retries,
        retry_base_delay=p.retry_base_delay,
    )


def build_router(config: PlannerConfig) -> WeatherRouter:
    p = config.providers
    nasa = NasaPowerClient(
        base_url=p.nasa_base_url,
        timeout=p.timeout_seconds,
        max_retries=p.max_retries,
        retry_base_delay=p.retry_base_delay,
    )
    meteomatics = MeteomaticsClient(
        base_url=p.meteomatics_base_url,
        timeout=p.timeout_seconds,
        max_retries=p.max_retries,
        retry_base_delay=p.retry_base_delay,
    )
    return WeatherRouter(nasa, meteomatics, routing=config.routing, providers=p)


def build_pipeline(config: PlannerConfig) -> ExplainPipeline:
    ai = None
    if config.ai.enabled:
        ai = GeminiClient(
            model=config.ai.model,
            base_url=config.ai.base_url,
            timeout=config.ai.timeout_seconds,
        )
    return ExplainPipeline(
        build_geocoder(config), build_router(config), ExplanationService(ai)
    )


def build_session(
    config: PlannerConfig,
    on_location_selected: Callable[[Coordinate], None] | None = None,
    router: WeatherRouter | None = None,
    geocoder: NominatimGeocoder | None = None,
) -> MapSession:
    """Map session with limiter and cache sized from config.

    Tapped points are named by reverse geocoding before routing.
    """
    fetch = router_fetcher(
        router or build_router(config), geocoder or build_geocoder(config)
    )
    return MapSession(
        fetch,
        rate_limiter=RateLimiter.from_config(config.rate_limit),
        cache=ResultCache.from_config(config.cache),
        on_location_selected=on_location_selected,
    )

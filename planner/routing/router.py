"""Temporal dispatch: pick a provider by how far the target date is from today.

| days until target            | strategy                           |
|------------------------------|------------------------------------|
| < 0                          | historical archive (NASA POWER)    |
| 0 .. short_term_days         | standard forecast (Meteomatics)    |
| .. seasonal_days             | seasonal ensemble (Meteomatics)    |
| > seasonal_days              | climate projection (Meteomatics)   |

A failed primary gets one fallback attempt against the historical archive.
If that fails too, the router returns an Error summary instead of raising.
"""

import logging
from collections.abc import Callable
from datetime import date

from planner.config.schema import ProvidersConfig, RoutingConfig
from planner.errors import ProviderError
from planner.ingest.adapters import normalize
from planner.ingest.meteomatics_client import MeteomaticsClient
from planner.ingest.nasa_client import NasaPowerClient
from planner.models.common import today as local_today
from planner.models.weather import (
    Coordinate,
    ProviderResponse,
    Strategy,
    SummaryStatus,
    WeatherSummary,
)

logger = logging.getLogger(__name__)

ALL_SOURCES_FAILED = (
    "Failed to get information from all sources. "
    "Please check API credentials and/or network connection."
)


def days_until(target: date, today: date) -> int:
    """Signed whole days from today to target."""
    return (target - today).days


def select_strategy(days_diff: int, routing: RoutingConfig) -> Strategy:
    if days_diff < 0:
        return Strategy.HISTORICAL
    if days_diff <= routing.short_term_days:
        return Strategy.STANDARD
    if days_diff <= routing.seasonal_days:
        return Strategy.SEASONAL
    return Strategy.PROJECTION


def _same_day_in_year(day: date, year: int) -> date:
    try:
        return day.replace(year=year)
    except ValueError:
        # Feb 29 in a non-leap year
        return day.replace(year=year, day=28)


def baseline_date(target: date, today: date) -> date:
    """Archive date to use for target.

    Past dates are used as-is. Otherwise the same calendar day in the most
    recent year where it lies strictly before today.
    """
    if target < today:
        return target
    candidate = _same_day_in_year(target, today.year)
    if candidate >= today:
        candidate = _same_day_in_year(target, today.year - 1)
    return candidate


class WeatherRouter:
    def __init__(
        self,
        nasa: NasaPowerClient,
        meteomatics: MeteomaticsClient,
        routing: RoutingConfig | None = None,
        providers: ProvidersConfig | None = None,
        today_func: Callable[[], date] = local_today,
    ):
        self.nasa = nasa
        self.meteomatics = meteomatics
        self.routing = routing or RoutingConfig()
        self.providers = providers or ProvidersConfig()
        self.today_func = today_func
        self._runners: dict[
            Strategy, Callable[[Coordinate, date], tuple[ProviderResponse, date, dict, str]]
        ] = {
            Strategy.HISTORICAL: self._historical,
            Strategy.STANDARD: self._standard,
            Strategy.SEASONAL: self._seasonal,
            Strategy.PROJECTION: self._projection,
        }

    def plan(self, target: date) -> list[Strategy]:
        """Ordered strategies to try for target: primary, then the archive."""
        primary = select_strategy(days_until(target, self.today_func()), self.routing)
        if primary == Strategy.HISTORICAL:
            return [primary]
        return [primary, Strategy.HISTORICAL]

    def summarize(
        self, coordinate: Coordinate, location_name: str, target: date
    ) -> WeatherSummary:
        """Run the strategy chain. Never raises for a valid coordinate and date."""
        chain = self.plan(target)
        logger.info(
            "Routing %s on %s via %s",
            location_name, target, " -> ".join(s.value for s in chain),
        )
        last_error = ""
        for position, strategy in enumerate(chain):
            try:
                summary = self._run(
                    strategy, coordinate, location_name, target, fallback=position > 0
                )
            except ProviderError as e:
                last_error = str(e)
                logger.warning("%s strategy failed for %s: %s", strategy, location_name, e)
                continue
            except Exception as e:
                last_error = str(e)
                logger.exception("%s strategy crashed for %s", strategy, location_name)
                continue
            if position > 0:
                logger.warning(
                    "Served %s on %s from fallback %s", location_name, target, strategy
                )
            return summary

        logger.error("All sources failed for %s on %s", location_name, target)
        message = ALL_SOURCES_FAILED
        if last_error:
            message = f"{message} Last error: {last_error}"
        return WeatherSummary.error(location_name, target.isoformat(), message, coordinate)

    def _run(
        self,
        strategy: Strategy,
        coordinate: Coordinate,
        location_name: str,
        target: date,
        fallback: bool = False,
    ) -> WeatherSummary:
        response, data_date, meta, source = self._runners[strategy](coordinate, target)
        if fallback:
            meta["fallback"] = True
        return WeatherSummary(
            location=location_name,
            date=target.isoformat(),
            status=SummaryStatus.SUCCESS,
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
            provider_meta={"strategy": strategy.value, **meta},
            weather_conditions=normalize(response, data_date),
            forecast_source=source,
            strategy=strategy,
        )

    # Strategy runners ---------------------------------------------------

    def _historical(self, coordinate: Coordinate, target: date):
        day = baseline_date(target, self.today_func())
        meta: dict = {"source": "NASA POWER"}
        if day != target:
            meta["baselineDate"] = day.isoformat()
        response = self.nasa.get_daily(coordinate, day)
        return response, day, meta, "NASA POWER Project (Historical Climate Baseline)"

    def _standard(self, coordinate: Coordinate, target: date):
        model = self.providers.standard_model
        response = self.meteomatics.get_forecast(coordinate, target, model=model)
        return response, target, {"modelUsed": model}, "Meteomatics (Standard Forecast)"

    def _seasonal(self, coordinate: Coordinate, target: date):
        model = self.providers.seasonal_model
        response = self.meteomatics.get_forecast(coordinate, target, model=model)
        return response, target, {"modelUsed": model}, "Meteomatics (Seasonal Forecast)"

    def _projection(self, coordinate: Coordinate, target: date):
        scenario = self.providers.climate_scenario
        response = self.meteomatics.get_projection(coordinate, target, scenario=scenario)
        meta = {"scenario": scenario, "predictionConfidence": "LOW (Model Simulation)"}
        return (
            response,
            target,
            meta,
            f"Meteomatics Climate Projection (Scenario: {scenario})",
        )

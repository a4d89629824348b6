"""Natural-language explanations of weather summaries.

Each call tries the AI text generator first. On any AI failure it falls back
to a templated sentence built from the summary's temperature, and if even
that cannot be built (no temperature) it returns a generic apology. Nothing
here raises to the caller.
"""

import json
import logging
from typing import Protocol

from planner.errors import AIServiceError
from planner.models.events import Favorability
from planner.models.weather import DesiredForecast, WeatherSummary

logger = logging.getLogger(__name__)

MATCH_TOLERANCE_C = 2.0
GENERIC_APOLOGY = (
    "Sorry, we couldn't analyze the weather for this event right now. "
    "Please try again in a little while."
)


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


def favorability(desired: DesiredForecast, summary: WeatherSummary) -> Favorability | None:
    """Tier the actual temperature against the desired one."""
    actual = summary.temperature
    if actual is None:
        return None
    if abs(actual - desired.temperature) <= MATCH_TOLERANCE_C:
        return Favorability.MATCHES
    if actual > desired.temperature:
        return Favorability.WARMER
    return Favorability.COOLER


def _explain_prompt(summary: WeatherSummary) -> str:
    return (
        "You are a friendly weather assistant helping someone plan an event. "
        "Explain in two or three sentences what the weather will likely be "
        "like, based on this data:\n"
        f"{json.dumps(summary.to_dict(), indent=2)}"
    )


def _compare_prompt(desired: DesiredForecast, summary: WeatherSummary) -> str:
    wanted = {
        "temperature": desired.temperature,
        "condition": desired.condition,
        "humidity": desired.humidity,
    }
    return (
        "Compare the weather the user wants with the expected weather and say "
        "briefly whether the day is favorable for their event.\n"
        f"Desired: {json.dumps(wanted)}\n"
        f"Expected: {json.dumps(summary.to_dict())}"
    )


class ExplanationService:
    def __init__(self, ai: TextGenerator | None = None):
        self.ai = ai

    def explain(self, summary: WeatherSummary) -> str:
        text = self._ask(_explain_prompt(summary))
        if text is not None:
            return text
        try:
            return self._fallback_explain(summary)
        except (ValueError, TypeError) as e:
            logger.warning("Fallback explanation unavailable: %s", e)
            return GENERIC_APOLOGY

    def compare(self, desired: DesiredForecast, summary: WeatherSummary) -> str:
        text = self._ask(_compare_prompt(desired, summary))
        if text is not None:
            return text
        try:
            return self._fallback_compare(desired, summary)
        except (ValueError, TypeError) as e:
            logger.warning("Fallback comparison unavailable: %s", e)
            return GENERIC_APOLOGY

    def _ask(self, prompt: str) -> str | None:
        if self.ai is None:
            return None
        try:
            return self.ai.generate(prompt)
        except AIServiceError as e:
            logger.warning("AI text generation failed, using template: %s", e)
        except Exception:
            logger.exception("AI text generation crashed, using template")
        return None

    @staticmethod
    def _fallback_explain(summary: WeatherSummary) -> str:
        temp = summary.temperature
        if temp is None:
            raise ValueError("summary has no temperature")
        source = summary.forecast_source or "available data"
        return (
            f"Expect around {temp:.1f}°C in {summary.location} on {summary.date}, "
            f"based on {source}."
        )

    @staticmethod
    def _fallback_compare(desired: DesiredForecast, summary: WeatherSummary) -> str:
        verdict = favorability(desired, summary)
        if verdict is None:
            raise ValueError("summary has no temperature")
        actual = summary.temperature
        if verdict == Favorability.MATCHES:
            return (
                f"The expected {actual:.1f}°C matches your desired "
                f"{desired.temperature:.1f}°C."
            )
        if verdict == Favorability.WARMER:
            return (
                f"It will be warmer than expected: {actual:.1f}°C versus your "
                f"desired {desired.temperature:.1f}°C."
            )
        return (
            f"It will be cooler than expected: {actual:.1f}°C versus your "
            f"desired {desired.temperature:.1f}°C."
        )

"""Google Gemini generateContent REST client."""

import logging
import os

import httpx

from planner.errors import AIServiceError

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.0-flash"


class GeminiClient:
    """Text generation through the Gemini REST API.

    The key comes from GEMINI_API_KEY unless passed explicitly. A missing key
    is reported per call so callers can fall back to templated text.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        base_url: str = GEMINI_BASE_URL,
        timeout: float = 10.0,
    ):
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY", "")
        self.model = model
        self.base_url = base_url
        self.timeout = timeout

    def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise AIServiceError("GEMINI_API_KEY not set")
        url = f"{self.base_url}/models/{self.model}:generateContent"
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            resp = httpx.post(
                url,
                params={"key": self.api_key},
                json=body,
                timeout=self.timeout,
            )
        except httpx.RequestError as e:
            logger.error("Gemini request failed: %s", e)
            raise AIServiceError(f"Request failed: {e}") from e

        if resp.status_code >= 400:
            logger.error("Gemini API %d: %s", resp.status_code, resp.text[:200])
            raise AIServiceError(f"HTTP {resp.status_code}")

        try:
            data = resp.json()
            parts = data["candidates"][0]["content"]["parts"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise AIServiceError("Gemini returned no candidates") from e

        text = "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()
        if not text:
            raise AIServiceError("Gemini returned empty text")
        return text

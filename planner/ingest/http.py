"""Shared GET helper with retry on 429/503 and provider error wrapping."""

import logging
import time

import httpx

from planner.errors import ProviderError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = (429, 503)


def get_json(
    url: str,
    *,
    provider: str,
    params: dict | None = None,
    headers: dict | None = None,
    auth: tuple[str, str] | None = None,
    timeout: float = 5.0,
    max_retries: int = 1,
    retry_base_delay: float = 0.5,
    error_cls: type[ProviderError] = ProviderError,
) -> dict | list:
    """GET a JSON document, retrying 429/503 and transport errors with backoff.

    Every failure surfaces as ``error_cls`` so callers only deal with one type.
    A timeout is an ordinary transport error.
    """
    for attempt in range(max_retries + 1):
        try:
            resp = httpx.get(
                url, params=params, headers=headers, auth=auth, timeout=timeout
            )
        except httpx.RequestError as e:
            if attempt < max_retries:
                delay = retry_base_delay * (2**attempt)
                logger.warning(
                    "%s request error, retrying in %.1fs: %s", provider, delay, e
                )
                time.sleep(delay)
                continue
            raise error_cls(f"{provider} request failed: {e}") from e

        if resp.status_code in RETRYABLE_STATUS and attempt < max_retries:
            delay = retry_base_delay * (2**attempt)
            logger.warning(
                "%s returned %d, retrying in %.1fs (attempt %d/%d)",
                provider, resp.status_code, delay, attempt + 1, max_retries,
            )
            time.sleep(delay)
            continue
        if resp.status_code >= 400:
            logger.error("%s API %d: %s", provider, resp.status_code, resp.text[:200])
            raise error_cls(
                f"{provider} API error: status {resp.status_code}", resp.status_code
            )
        try:
            return resp.json()
        except ValueError as e:
            raise error_cls(f"{provider} returned invalid JSON") from e

    raise error_cls(f"{provider} retries exhausted")

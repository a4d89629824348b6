"""Satellite imagery service reachability check."""

import logging
from dataclasses import dataclass

import httpx

from planner.config.defaults import DEFAULT_IMAGERY_SERVICES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageryStatus:
    status: str  # "success" | "simulated"
    provider: str
    message: str


def check_imagery_services(
    services: list[tuple[str, str]] | None = None,
    timeout: float = 3.0,
) -> ImageryStatus:
    """Return the first reachable imagery service, or a simulated status."""
    for name, url in services or DEFAULT_IMAGERY_SERVICES:
        try:
            resp = httpx.head(url, timeout=timeout, follow_redirects=True)
        except httpx.RequestError as e:
            logger.warning("%s unavailable: %s", name, e)
            continue
        if resp.is_success:
            logger.info("%s imagery service is accessible", name)
            return ImageryStatus("success", name, f"{name} connected")
        logger.warning("%s returned %d", name, resp.status_code)

    logger.warning("All imagery services unavailable, using simulated data")
    return ImageryStatus(
        "simulated", "Simulated Satellite Data", "Using simulated satellite data"
    )

"""Tests for the NASA POWER client with mocked httpx."""

from datetime import date

import httpx
import pytest
import respx

from planner.errors import ProviderError
from planner.ingest.nasa_client import NasaPowerClient, nasa_date_key

BASE = "https://test-nasa.example.com/daily/point"


@pytest.fixture
def nasa() -> NasaPowerClient:
    return NasaPowerClient(base_url=BASE, max_retries=0, retry_base_delay=0.01)


def test_date_key():
    assert nasa_date_key(date(2025, 1, 5)) == "20250105"


class TestGetDaily:
    @respx.mock
    def test_success(self, nasa, sf, load_json):
        route = respx.get(BASE).mock(
            return_value=httpx.Response(200, json=load_json("nasa_daily_sf.json"))
        )
        response = nasa.get_daily(sf, date(2025, 10, 19))

        assert response.provider == "nasa"
        assert "properties" in response.raw
        params = route.calls[0].request.url.params
        assert params["start"] == "20251019"
        assert params["end"] == "20251019"
        assert params["parameters"] == "T2M,PRECTOTCORR,WS2M"
        assert params["community"] == "AG"
        assert params["format"] == "JSON"
        assert float(params["latitude"]) == pytest.approx(37.7749)

    @respx.mock
    def test_server_error(self, nasa, sf):
        respx.get(BASE).mock(return_value=httpx.Response(500))
        with pytest.raises(ProviderError):
            nasa.get_daily(sf, date(2025, 10, 19))

    @respx.mock
    def test_unexpected_payload(self, nasa, sf):
        respx.get(BASE).mock(return_value=httpx.Response(200, json=[1, 2]))
        with pytest.raises(ProviderError, match="unexpected payload"):
            nasa.get_daily(sf, date(2025, 10, 19))

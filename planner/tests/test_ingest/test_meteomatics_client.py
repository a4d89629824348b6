"""Tests for the Meteomatics client with mocked httpx."""

from datetime import date

import httpx
import pytest
import respx

from planner.errors import ProviderError
from planner.ingest.meteomatics_client import MeteomaticsClient

HOST = "test-meteomatics.example.com"


@pytest.fixture
def meteomatics() -> MeteomaticsClient:
    return MeteomaticsClient(
        username="user",
        password="secret",
        base_url=f"https://{HOST}",
        max_retries=0,
    )


class TestGetForecast:
    @respx.mock
    def test_success(self, meteomatics, sf, load_json):
        route = respx.get(host=HOST).mock(
            return_value=httpx.Response(200, json=load_json("meteomatics_forecast.json"))
        )
        response = meteomatics.get_forecast(sf, date(2026, 10, 21), model="mix")

        assert response.provider == "meteomatics"
        request = route.calls[0].request
        assert "2026-10-21T12:00:00Z" in request.url.path
        assert "t_2m:C" in request.url.path
        assert request.url.path.endswith("/json")
        assert request.url.params["model"] == "mix"
        assert request.headers["authorization"].startswith("Basic ")

    @respx.mock
    def test_http_error(self, meteomatics, sf):
        respx.get(host=HOST).mock(return_value=httpx.Response(401))
        with pytest.raises(ProviderError) as exc:
            meteomatics.get_forecast(sf, date(2026, 10, 21))
        assert exc.value.status_code == 401


class TestGetProjection:
    @respx.mock
    def test_tagged_as_projection(self, meteomatics, sf, load_json):
        route = respx.get(host=HOST).mock(
            return_value=httpx.Response(200, json=load_json("meteomatics_forecast.json"))
        )
        response = meteomatics.get_projection(sf, date(2030, 6, 1), "mri-esm2-ssp585")

        assert response.provider == "projection"
        assert route.calls[0].request.url.params["model"] == "mri-esm2-ssp585"


class TestCredentials:
    @respx.mock(assert_all_called=False)
    def test_missing_credentials_fail_at_call_time(self, sf, monkeypatch, respx_mock):
        monkeypatch.delenv("METEOMATICS_USERNAME", raising=False)
        monkeypatch.delenv("METEOMATICS_PASSWORD", raising=False)
        route = respx_mock.get(host=HOST)
        client = MeteomaticsClient(base_url=f"https://{HOST}")

        with pytest.raises(ProviderError, match="credentials"):
            client.get_forecast(sf, date(2026, 10, 21))
        assert not route.called

    def test_credentials_from_environment(self, monkeypatch):
        monkeypatch.setenv("METEOMATICS_USERNAME", "env-user")
        monkeypatch.setenv("METEOMATICS_PASSWORD", "env-pass")
        client = MeteomaticsClient()
        assert client._auth() == ("env-user", "env-pass")

"""Tests for the imagery service check."""

import httpx
import respx

from planner.ingest.imagery import check_imagery_services

SERVICES = [
    ("Primary", "https://primary.example.com/tiles"),
    ("Backup", "https://backup.example.com/tiles"),
]


class TestProbeImagery:
    @respx.mock(assert_all_called=False)
    def test_first_reachable_wins(self, respx_mock):
        respx_mock.head("https://primary.example.com/tiles").mock(
            return_value=httpx.Response(200)
        )
        backup = respx_mock.head("https://backup.example.com/tiles")

        status = check_imagery_services(SERVICES)
        assert status.status == "success"
        assert status.provider == "Primary"
        assert status.message == "Primary connected"
        assert not backup.called

    @respx.mock
    def test_skips_unreachable(self):
        respx.head("https://primary.example.com/tiles").mock(
            side_effect=httpx.ConnectTimeout("timed out")
        )
        respx.head("https://backup.example.com/tiles").mock(
            return_value=httpx.Response(200)
        )
        status = check_imagery_services(SERVICES)
        assert status.provider == "Backup"

    @respx.mock
    def test_all_down_is_simulated(self):
        respx.head("https://primary.example.com/tiles").mock(
            return_value=httpx.Response(503)
        )
        respx.head("https://backup.example.com/tiles").mock(
            side_effect=httpx.ConnectError("refused")
        )
        status = check_imagery_services(SERVICES)
        assert status.status == "simulated"
        assert status.provider == "Simulated Satellite Data"

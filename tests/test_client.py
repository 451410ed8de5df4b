"""
Unit tests for AstronomyClient.
"""

import json

import httpx
import pytest

from sun_phase.weather.client import AstronomyClient, FetchError, ParseError
from sun_phase.weather.models import SunPhaseTimes

ASTRONOMY_BODY = {
    "response": {"version": "0.1", "features": {"astronomy": 1}},
    "moon_phase": {"percentIlluminated": "81", "ageOfMoon": "10"},
    "sun_phase": {
        "sunrise": {"hour": "7", "minute": "01"},
        "sunset": {"hour": "19", "minute": "12"},
    },
}


def make_client(handler) -> AstronomyClient:
    return AstronomyClient(
        api_key="KEY",
        location="CA/San_Francisco",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


class TestAstronomyClient:
    """Test cases for AstronomyClient."""

    def test_feature_url(self):
        client = AstronomyClient(api_key="KEY", location="CA/San_Francisco")

        assert client.feature_url("astronomy") == (
            "https://api.wunderground.com/api/KEY/astronomy/q/CA/San_Francisco.json"
        )

    @pytest.mark.asyncio
    async def test_get_sun_phase(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=ASTRONOMY_BODY)

        async with make_client(handler) as client:
            result = await client.get_sun_phase()

        assert result == SunPhaseTimes(sunrise_h=7, sunrise_m=1, sunset_h=19, sunset_m=12)
        assert len(requests) == 1
        assert requests[0].method == "GET"
        assert str(requests[0].url) == (
            "https://api.wunderground.com/api/KEY/astronomy/q/CA/San_Francisco.json"
        )

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(FetchError, match="connection refused"):
                await client.get_sun_phase()

    def test_timeout_configured(self):
        client = AstronomyClient(api_key="KEY", location="CA/San_Francisco", timeout=2.0)

        assert client.client.timeout == httpx.Timeout(2.0)

    @pytest.mark.asyncio
    async def test_read_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_client(handler) as client:
            with pytest.raises(FetchError, match="timed out"):
                await client.get_sun_phase()

    @pytest.mark.asyncio
    async def test_non_2xx_status(self):
        def handler(request):
            return httpx.Response(503, text="unavailable")

        async with make_client(handler) as client:
            with pytest.raises(FetchError, match="503"):
                await client.get_sun_phase()

    @pytest.mark.asyncio
    async def test_malformed_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>not json</html>")

        async with make_client(handler) as client:
            with pytest.raises(ParseError):
                await client.get_sun_phase()

    @pytest.mark.asyncio
    async def test_missing_sun_phase(self):
        def handler(request):
            return httpx.Response(200, json={"response": {"error": {"type": "keynotfound"}}})

        async with make_client(handler) as client:
            with pytest.raises(ParseError):
                await client.get_sun_phase()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sunrise", [
        {"hour": "25", "minute": "00"},
        {"hour": "six", "minute": "00"},
        {"hour": "", "minute": "00"},
    ])
    async def test_invalid_times(self, sunrise):
        body = json.loads(json.dumps(ASTRONOMY_BODY))
        body["sun_phase"]["sunrise"] = sunrise

        def handler(request):
            return httpx.Response(200, json=body)

        async with make_client(handler) as client:
            with pytest.raises(ParseError):
                await client.get_sun_phase()

import httpx

from config import get_settings
from services.air_quality_client import AirQualityClient


async def test_returns_reading_and_sends_coordinates(database_url):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json={"list": [{"main": {"aqi": 1}}]})

    client = AirQualityClient(transport=httpx.MockTransport(handler))
    data, error = await client.get_air_quality(40.7, -74.0)

    assert error is None
    assert data["list"][0]["main"]["aqi"] == 1
    assert seen["lat"] == "40.7"
    assert seen["lon"] == "-74.0"
    assert seen["appid"] == get_settings().air_quality_api_key


async def test_http_error_is_returned_not_raised(database_url):
    client = AirQualityClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(401, json={}))
    )
    data, error = await client.get_air_quality(0, 0)

    assert data is None
    assert "401" in error


async def test_connection_failure_is_returned(database_url):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = AirQualityClient(transport=httpx.MockTransport(handler))
    data, error = await client.get_air_quality(0, 0)

    assert data is None
    assert "Cannot connect" in error

"""Tests for the Open-Meteo client with mocked httpx."""

import errno
import json
import math
from datetime import date
from pathlib import Path

import httpx
import pytest
import respx

from skycast.ingest.open_meteo_client import OpenMeteoClient, decode_forecast
from skycast.models.common import Coordinate
from skycast.models.errors import (
    DecodeError,
    InvalidRequest,
    NetworkError,
    NetworkErrorKind,
)
from skycast.models.forecast import ForecastRequest

FIXTURE_DIR = Path(__file__).parent.parent / "fixtures"
BASE_URL = "https://test-meteo.example.com/v1/forecast"
BERLIN = Coordinate(52.52, 13.41)


@pytest.fixture
def meteo() -> OpenMeteoClient:
    return OpenMeteoClient(base_url=BASE_URL, timeout=1.0)


@pytest.fixture
def berlin_forecast() -> dict:
    with open(FIXTURE_DIR / "open_meteo_forecast_berlin.json") as f:
        return json.load(f)


def _request() -> ForecastRequest:
    return ForecastRequest(BERLIN, date(2024, 8, 5), date(2024, 8, 20))


class TestBuildUrl:
    def test_exact_url(self, meteo: OpenMeteoClient):
        assert meteo.build_url(_request()) == (
            f"{BASE_URL}?latitude=52.52&longitude=13.41"
            "&daily=temperature_2m_max,weathercode"
            "&start_date=2024-08-05&end_date=2024-08-20&timezone=auto"
        )

    @pytest.mark.parametrize(
        "lat,lon",
        [(math.nan, 0.0), (0.0, math.inf), (-math.inf, 10.0), (91.0, 0.0), (0.0, 181.0)],
    )
    def test_unrepresentable_coordinate(self, meteo: OpenMeteoClient, lat, lon):
        request = ForecastRequest(Coordinate(lat, lon), date(2024, 8, 5), date(2024, 8, 6))
        with pytest.raises(InvalidRequest):
            meteo.build_url(request)

    def test_default_range_is_today_plus_fifteen(self):
        request = ForecastRequest.for_days(BERLIN, start=date(2024, 8, 5))
        assert request.end_date == date(2024, 8, 20)

    def test_reversed_range_rejected(self):
        with pytest.raises(InvalidRequest):
            ForecastRequest(BERLIN, date(2024, 8, 6), date(2024, 8, 5))


class TestDecodeForecast:
    def test_fixture(self, berlin_forecast: dict):
        raw = decode_forecast(json.dumps(berlin_forecast))
        assert raw.times[0] == "2024-08-05"
        assert raw.max_temperatures[1] == 27.0
        assert raw.weather_codes == (3, 61, 95, 2)

    def test_invalid_json(self):
        with pytest.raises(DecodeError):
            decode_forecast(b"<html>oops</html>")

    def test_missing_daily(self):
        with pytest.raises(DecodeError):
            decode_forecast(b'{"latitude": 1.0}')

    def test_missing_field(self):
        body = {"daily": {"time": ["2024-08-05"], "temperature_2m_max": [20.0]}}
        with pytest.raises(DecodeError):
            decode_forecast(json.dumps(body))

    def test_wrong_element_type(self):
        body = {
            "daily": {
                "time": ["2024-08-05"],
                "temperature_2m_max": ["warm"],
                "weathercode": [0],
            }
        }
        with pytest.raises(DecodeError):
            decode_forecast(json.dumps(body))

    def test_null_temperature(self):
        body = {
            "daily": {
                "time": ["2024-08-05"],
                "temperature_2m_max": [None],
                "weathercode": [0],
            }
        }
        with pytest.raises(DecodeError):
            decode_forecast(json.dumps(body))

    def test_length_mismatch(self):
        body = {
            "daily": {
                "time": ["2024-08-05", "2024-08-06", "2024-08-07"],
                "temperature_2m_max": [21.5, 19.0],
                "weathercode": [0, 61],
            }
        }
        with pytest.raises(DecodeError):
            decode_forecast(json.dumps(body))


class TestFetchForecast:
    @pytest.mark.asyncio
    @respx.mock
    async def test_success(self, meteo: OpenMeteoClient):
        payload = {
            "daily": {
                "time": ["2024-08-05", "2024-08-06"],
                "temperature_2m_max": [21.5, 19.0],
                "weathercode": [0, 61],
            }
        }
        route = respx.get(BASE_URL).mock(return_value=httpx.Response(200, json=payload))

        days = await meteo.fetch_forecast(BERLIN, (date(2024, 8, 5), date(2024, 8, 6)))

        assert [(d.date, d.temperature, d.description, d.icon_id) for d in days] == [
            ("Mon, 5 August", 21.5, "Clear", "sun"),
            ("Tue, 6 August", 19.0, "Rainy", "cloud-rain"),
        ]
        params = route.calls[0].request.url.params
        assert params["latitude"] == "52.52"
        assert params["longitude"] == "13.41"
        assert params["daily"] == "temperature_2m_max,weathercode"
        assert params["start_date"] == "2024-08-05"
        assert params["end_date"] == "2024-08-06"
        assert params["timezone"] == "auto"

    @pytest.mark.asyncio
    @respx.mock
    async def test_fixture_payload(self, meteo: OpenMeteoClient, berlin_forecast: dict):
        respx.get(BASE_URL).mock(return_value=httpx.Response(200, json=berlin_forecast))

        days = await meteo.fetch_forecast(BERLIN)

        assert len(days) == 4
        assert [d.description for d in days] == ["Cloudy", "Rainy", "Stormy", "Partly Cloudy"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_single_request_no_retry(self, meteo: OpenMeteoClient):
        route = respx.get(BASE_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(NetworkError) as exc_info:
            await meteo.fetch_forecast(BERLIN)
        assert exc_info.value.kind == NetworkErrorKind.OTHER
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_body(self, meteo: OpenMeteoClient):
        respx.get(BASE_URL).mock(return_value=httpx.Response(200, text="not json"))

        with pytest.raises(DecodeError):
            await meteo.fetch_forecast(BERLIN)

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout(self, meteo: OpenMeteoClient):
        respx.get(BASE_URL).mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(NetworkError) as exc_info:
            await meteo.fetch_forecast(BERLIN)
        assert exc_info.value.kind == NetworkErrorKind.TIMEOUT

    @pytest.mark.asyncio
    async def test_no_connectivity(self):
        def unreachable(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError(
                "[Errno 101] Network is unreachable", request=request
            ) from OSError(errno.ENETUNREACH, "Network is unreachable")

        client = OpenMeteoClient(
            base_url=BASE_URL, timeout=1.0, transport=httpx.MockTransport(unreachable)
        )

        with pytest.raises(NetworkError) as exc_info:
            await client.fetch_forecast(BERLIN)
        assert exc_info.value.kind == NetworkErrorKind.NO_CONNECTIVITY
        assert "No internet connection" in exc_info.value.user_message

    @pytest.mark.asyncio
    @respx.mock
    async def test_connection_refused(self, meteo: OpenMeteoClient):
        respx.get(BASE_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(NetworkError) as exc_info:
            await meteo.fetch_forecast(BERLIN)
        assert exc_info.value.kind == NetworkErrorKind.HOST_UNREACHABLE

    @pytest.mark.asyncio
    async def test_invalid_coordinate_makes_no_request(self, meteo: OpenMeteoClient):
        with respx.mock(assert_all_called=False) as mock:
            route = mock.get(BASE_URL)
            with pytest.raises(InvalidRequest):
                await meteo.fetch_forecast(Coordinate(math.nan, 0.0))
            assert not route.called

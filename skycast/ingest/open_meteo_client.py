"""Open-Meteo daily forecast client."""

import logging
from datetime import date

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from skycast.config.defaults import DEFAULT_DAILY_FIELDS, OPEN_METEO_BASE_URL
from skycast.forecast.assembler import API_DATE_FORMAT, assemble
from skycast.ingest.transport import network_error_kind
from skycast.models.common import Coordinate
from skycast.models.errors import DecodeError, InvalidRequest, NetworkError, NetworkErrorKind
from skycast.models.forecast import (
    DEFAULT_FORECAST_DAYS,
    DailyForecast,
    ForecastRequest,
    RawForecastResponse,
)

logger = logging.getLogger(__name__)


class _DailyPayload(BaseModel):
    model_config = ConfigDict(strict=True)

    time: list[str]
    temperature_2m_max: list[float]
    weathercode: list[int]

    @model_validator(mode="after")
    def _aligned(self) -> "_DailyPayload":
        if not (
            len(self.time) == len(self.temperature_2m_max) == len(self.weathercode)
        ):
            raise ValueError(
                f"daily arrays differ in length: time={len(self.time)} "
                f"temperature_2m_max={len(self.temperature_2m_max)} "
                f"weathercode={len(self.weathercode)}"
            )
        return self


class _ForecastPayload(BaseModel):
    daily: _DailyPayload


def decode_forecast(body: bytes | str) -> RawForecastResponse:
    """Decode an Open-Meteo JSON body. Raises DecodeError on any mismatch."""
    try:
        payload = _ForecastPayload.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"Unexpected Open-Meteo response: {e}") from e
    daily = payload.daily
    return RawForecastResponse(
        times=tuple(daily.time),
        max_temperatures=tuple(daily.temperature_2m_max),
        weather_codes=tuple(daily.weathercode),
    )


class OpenMeteoClient:
    def __init__(
        self,
        base_url: str = OPEN_METEO_BASE_URL,
        timeout: float = 30.0,
        daily_fields: tuple[str, ...] | list[str] = DEFAULT_DAILY_FIELDS,
        forecast_days: int = DEFAULT_FORECAST_DAYS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.daily_fields = tuple(daily_fields)
        self.forecast_days = forecast_days
        self.transport = transport

    def build_url(self, request: ForecastRequest) -> str:
        """Build the forecast URL for a request.

        Raises InvalidRequest if the coordinate cannot be placed in a URL.
        """
        coord = request.coordinate
        if not coord.is_finite or not coord.in_range:
            raise InvalidRequest(
                f"Coordinate not representable: {coord.latitude}, {coord.longitude}"
            )
        url = (
            f"{self.base_url}?latitude={coord.latitude}&longitude={coord.longitude}"
            f"&daily={','.join(self.daily_fields)}"
            f"&start_date={request.start_date.strftime(API_DATE_FORMAT)}"
            f"&end_date={request.end_date.strftime(API_DATE_FORMAT)}"
            "&timezone=auto"
        )
        try:
            httpx.URL(url)
        except httpx.InvalidURL as e:
            raise InvalidRequest(f"Malformed forecast URL: {url}") from e
        return url

    async def get_forecast(self, request: ForecastRequest) -> RawForecastResponse:
        """Issue a single GET and decode the body. No retries."""
        url = self.build_url(request)
        logger.info("Fetching forecast: %s", url)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                resp = await client.get(url, headers={"Accept": "application/json"})
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("Open-Meteo returned %d for %s", e.response.status_code, url)
            raise NetworkError(
                NetworkErrorKind.OTHER, f"HTTP {e.response.status_code}"
            ) from e
        except httpx.UnsupportedProtocol as e:
            raise InvalidRequest(str(e)) from e
        except httpx.TransportError as e:
            kind = network_error_kind(e)
            logger.warning("Open-Meteo request failed (%s): %s", kind, e)
            raise NetworkError(kind, str(e)) from e

        return decode_forecast(resp.content)

    async def fetch_forecast(
        self,
        coordinate: Coordinate,
        date_range: tuple[date, date] | None = None,
    ) -> list[DailyForecast]:
        """Fetch and assemble the daily forecast for a coordinate.

        Without a date range the request covers today .. today+forecast_days.
        """
        if date_range is None:
            request = ForecastRequest.for_days(coordinate, days=self.forecast_days)
        else:
            request = ForecastRequest(coordinate, *date_range)
        raw = await self.get_forecast(request)
        days = assemble(raw)
        logger.info(
            "Assembled %d forecast days for %.4f,%.4f",
            len(days), coordinate.latitude, coordinate.longitude,
        )
        return days

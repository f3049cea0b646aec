"""Forecast request and response models."""

from dataclasses import dataclass
from datetime import date, timedelta

from skycast.models.common import Coordinate, today
from skycast.models.errors import InvalidRequest

DEFAULT_FORECAST_DAYS = 15


@dataclass(frozen=True)
class ForecastRequest:
    coordinate: Coordinate
    start_date: date
    end_date: date  # inclusive

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            raise InvalidRequest(
                f"start_date {self.start_date} is after end_date {self.end_date}"
            )

    @classmethod
    def for_days(
        cls,
        coordinate: Coordinate,
        days: int = DEFAULT_FORECAST_DAYS,
        start: date | None = None,
    ) -> "ForecastRequest":
        """Request covering start .. start+days (defaults to today)."""
        start = start or today()
        return cls(coordinate, start, start + timedelta(days=days))


@dataclass(frozen=True)
class RawForecastResponse:
    """Decoded wire shape: three index-aligned daily sequences."""

    times: tuple[str, ...]
    max_temperatures: tuple[float, ...]
    weather_codes: tuple[int, ...]

    @property
    def lengths_match(self) -> bool:
        return len(self.times) == len(self.max_temperatures) == len(self.weather_codes)


@dataclass(frozen=True)
class DailyForecast:
    date: str
    temperature: float  # °C
    description: str
    icon_id: str

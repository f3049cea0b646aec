"""Forecast assembler: zips decoded daily arrays into display records."""

from datetime import datetime

from skycast.forecast.classifier import classify
from skycast.models.errors import DecodeError
from skycast.models.forecast import DailyForecast, RawForecastResponse

API_DATE_FORMAT = "%Y-%m-%d"


def format_date(date_str: str) -> str:
    """Reformat "2024-08-05" as "Mon, 5 August".

    Strings that are not API dates are returned unchanged.
    """
    try:
        d = datetime.strptime(date_str, API_DATE_FORMAT).date()
    except (ValueError, TypeError):
        return date_str
    return f"{d.strftime('%a')}, {d.day} {d.strftime('%B')}"


def assemble(raw: RawForecastResponse) -> list[DailyForecast]:
    """Build one DailyForecast per day, preserving response order."""
    if not raw.lengths_match:
        raise DecodeError(
            "Daily arrays differ in length: "
            f"time={len(raw.times)} "
            f"temperature_2m_max={len(raw.max_temperatures)} "
            f"weathercode={len(raw.weather_codes)}"
        )

    days: list[DailyForecast] = []
    for date_str, temperature, code in zip(
        raw.times, raw.max_temperatures, raw.weather_codes, strict=True
    ):
        description, icon_id = classify(code)
        days.append(
            DailyForecast(
                date=format_date(date_str),
                temperature=temperature,
                description=description,
                icon_id=icon_id,
            )
        )
    return days

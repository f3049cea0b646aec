"""Tests for forecast assembly and date formatting."""

import pytest

from skycast.forecast.assembler import assemble, format_date
from skycast.models.errors import DecodeError
from skycast.models.forecast import DailyForecast, RawForecastResponse


class TestFormatDate:
    def test_api_date(self):
        assert format_date("2024-08-05") == "Mon, 5 August"

    def test_two_digit_day(self):
        assert format_date("2024-12-25") == "Wed, 25 December"

    def test_unparseable_passes_through(self):
        assert format_date("not-a-date") == "not-a-date"

    def test_empty_passes_through(self):
        assert format_date("") == ""

    def test_invalid_calendar_date_passes_through(self):
        assert format_date("2024-02-30") == "2024-02-30"


class TestAssemble:
    def test_end_to_end_example(self):
        raw = RawForecastResponse(
            times=("2024-08-05", "2024-08-06"),
            max_temperatures=(21.5, 19.0),
            weather_codes=(0, 61),
        )
        assert assemble(raw) == [
            DailyForecast("Mon, 5 August", 21.5, "Clear", "sun"),
            DailyForecast("Tue, 6 August", 19.0, "Rainy", "cloud-rain"),
        ]

    def test_preserves_order_and_count(self):
        times = tuple(f"2024-08-{d:02d}" for d in range(1, 11))
        raw = RawForecastResponse(
            times=times,
            max_temperatures=tuple(float(t) for t in range(10)),
            weather_codes=(3,) * 10,
        )
        days = assemble(raw)
        assert len(days) == 10
        assert [d.temperature for d in days] == [float(t) for t in range(10)]
        assert days[0].date == "Thu, 1 August"
        assert days[-1].date == "Sat, 10 August"

    def test_empty_response(self):
        assert assemble(RawForecastResponse((), (), ())) == []

    def test_bad_date_does_not_fail_batch(self):
        raw = RawForecastResponse(
            times=("2024-08-05", "garbage"),
            max_temperatures=(20.0, 18.0),
            weather_codes=(1, 200),
        )
        days = assemble(raw)
        assert days[1].date == "garbage"
        assert days[1].description == "Unknown"
        assert days[1].icon_id == "question-mark"

    @pytest.mark.parametrize(
        "times,temps,codes",
        [
            (("2024-08-05", "2024-08-06"), (21.5,), (0, 61)),
            (("2024-08-05",), (21.5, 19.0), (0, 61)),
            (("2024-08-05", "2024-08-06"), (21.5, 19.0), (0,)),
        ],
    )
    def test_length_mismatch_is_decode_error(self, times, temps, codes):
        with pytest.raises(DecodeError):
            assemble(RawForecastResponse(times, temps, codes))

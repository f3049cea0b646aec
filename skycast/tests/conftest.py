"""Shared test fixtures."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import yaml

from skycast.ingest.geocoder import GeocodedPlace, NominatimGeocoder
from skycast.ingest.location import AuthorizationStatus, IpLocationProvider
from skycast.ingest.open_meteo_client import OpenMeteoClient
from skycast.models.common import Coordinate
from skycast.models.forecast import DailyForecast
from skycast.viewmodel.weather_view_model import WeatherViewModel

FIXTURE_DIR = Path(__file__).parent / "fixtures"

PARIS = Coordinate(48.8588897, 2.3200410)
BERLIN = Coordinate(52.5200131, 13.4049541)


def load_fixture(name: str):
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def sample_forecast() -> list[DailyForecast]:
    return [
        DailyForecast("Mon, 5 August", 21.5, "Clear", "sun"),
        DailyForecast("Tue, 6 August", 19.0, "Rainy", "cloud-rain"),
    ]


@pytest.fixture
def mock_forecast_client(sample_forecast) -> MagicMock:
    client = MagicMock(spec=OpenMeteoClient)
    client.fetch_forecast.return_value = sample_forecast
    return client


@pytest.fixture
def mock_geocoder() -> MagicMock:
    geocoder = MagicMock(spec=NominatimGeocoder)
    geocoder.forward_geocode.return_value = GeocodedPlace("Paris", PARIS)
    geocoder.reverse_geocode.return_value = GeocodedPlace("Berlin", BERLIN)
    return geocoder


@pytest.fixture
def mock_location_provider() -> MagicMock:
    provider = MagicMock(spec=IpLocationProvider)
    provider.authorization_status.return_value = AuthorizationStatus.AUTHORIZED
    provider.request_authorization.return_value = AuthorizationStatus.AUTHORIZED
    provider.current_location.return_value = BERLIN
    return provider


@pytest.fixture
def view_model(
    mock_forecast_client, mock_geocoder, mock_location_provider
) -> WeatherViewModel:
    return WeatherViewModel(
        mock_forecast_client, mock_geocoder, mock_location_provider
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "forecast": {"timeout_seconds": 5.0, "forecast_days": 7},
        "location": {"provider": "fixed", "latitude": 48.85, "longitude": 2.35},
        "logging": {"level": "DEBUG"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path

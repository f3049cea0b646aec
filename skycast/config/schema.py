"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator, model_validator

from skycast.config.defaults import (
    DEFAULT_DAILY_FIELDS,
    DEFAULT_USER_AGENT,
    IPAPI_BASE_URL,
    NOMINATIM_BASE_URL,
    OPEN_METEO_BASE_URL,
)


class LocationProviderKind(StrEnum):
    IP = "ip"
    FIXED = "fixed"


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = OPEN_METEO_BASE_URL
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    forecast_days: int = Field(default=15, ge=0, le=15)
    daily_fields: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DAILY_FIELDS), min_length=1
    )


class GeocodingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = NOMINATIM_BASE_URL
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=3)
    language: str = "en"
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: LocationProviderKind = LocationProviderKind.IP
    allow_ip_lookup: bool = True
    ip_lookup_url: str = IPAPI_BASE_URL
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    timeout_seconds: float = Field(default=10.0, gt=0.0)

    @model_validator(mode="after")
    def _fixed_needs_coordinate(self) -> "LocationConfig":
        if self.provider == LocationProviderKind.FIXED and (
            self.latitude is None or self.longitude is None
        ):
            raise ValueError("fixed location provider requires latitude and longitude")
        return self


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    level: LogLevel = LogLevel.INFO
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value):
        return value.upper() if isinstance(value, str) else value


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    forecast: ForecastConfig = ForecastConfig()
    geocoding: GeocodingConfig = GeocodingConfig()
    location: LocationConfig = LocationConfig()
    logging: LoggingConfig = LoggingConfig()

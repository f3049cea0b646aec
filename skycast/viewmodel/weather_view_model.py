"""Weather view model: resolves a location, fetches its forecast, owns state.

All observable state lives in one frozen ``ViewState`` that is replaced as a
whole on every transition. Actions are not cancelled when a new one starts;
whichever action finishes last determines the final state.
"""

import logging
from collections.abc import Callable
from dataclasses import replace

from skycast.config.schema import AppConfig, LocationProviderKind
from skycast.ingest.geocoder import Geocoder, NominatimGeocoder
from skycast.ingest.location import (
    AuthorizationStatus,
    FixedLocationProvider,
    IpLocationProvider,
    LocationProvider,
)
from skycast.ingest.open_meteo_client import OpenMeteoClient
from skycast.models.common import Coordinate
from skycast.models.errors import (
    GeoNotFound,
    GeoPartialResult,
    LocationPermissionDenied,
    LocationUnavailable,
    WeatherLookupError,
)
from skycast.models.state import ErrorState, Phase, ViewState

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown location"

StateListener = Callable[[ViewState], None]


class WeatherViewModel:
    def __init__(
        self,
        forecast_client: OpenMeteoClient,
        geocoder: Geocoder,
        location_provider: LocationProvider | None = None,
    ):
        self.forecast_client = forecast_client
        self.geocoder = geocoder
        self.location_provider = location_provider
        self._state = ViewState()
        self._listeners: list[StateListener] = []

    @classmethod
    def from_config(cls, config: AppConfig) -> "WeatherViewModel":
        forecast_client = OpenMeteoClient(
            base_url=config.forecast.base_url,
            timeout=config.forecast.timeout_seconds,
            daily_fields=config.forecast.daily_fields,
            forecast_days=config.forecast.forecast_days,
        )
        geocoder = NominatimGeocoder(
            base_url=config.geocoding.base_url,
            user_agent=config.geocoding.user_agent,
            language=config.geocoding.language,
            timeout=config.geocoding.timeout_seconds,
        )
        loc = config.location
        provider: LocationProvider
        if loc.provider == LocationProviderKind.FIXED:
            provider = FixedLocationProvider(Coordinate(loc.latitude, loc.longitude))
        else:
            provider = IpLocationProvider(
                allowed=loc.allow_ip_lookup,
                base_url=loc.ip_lookup_url,
                timeout=loc.timeout_seconds,
            )
        return cls(forecast_client, geocoder, provider)

    @property
    def state(self) -> ViewState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for state changes. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def submit_city_query(self, name: str) -> ViewState:
        """Look up a city typed by the user. The name is recorded in history
        before the lookup starts, whether or not it succeeds."""
        history = self._state.search_history
        if name not in history:
            history = history + (name,)
        self._transition(phase=Phase.RESOLVING, search_history=history)
        return await self._resolve_city(name)

    async def select_history_entry(self, name: str) -> ViewState:
        self._transition(phase=Phase.RESOLVING)
        return await self._resolve_city(name)

    async def use_device_location(self) -> ViewState:
        self._transition(phase=Phase.RESOLVING)
        try:
            coordinate = await self._device_coordinate()
            try:
                place = await self.geocoder.reverse_geocode(coordinate)
            except GeoNotFound as e:
                raise GeoNotFound(e.detail, reverse=True) from e
            return await self._fetch(coordinate, place.locality or UNKNOWN_LOCATION)
        except WeatherLookupError as e:
            return self._fail(e)

    def dismiss_error(self) -> ViewState:
        return self._transition(error=None)

    async def _resolve_city(self, name: str) -> ViewState:
        try:
            place = await self.geocoder.forward_geocode(name)
            if place.coordinate is None:
                raise GeoPartialResult(f"No coordinates for {name!r}")
            return await self._fetch(place.coordinate, place.locality or name)
        except WeatherLookupError as e:
            return self._fail(e)

    async def _device_coordinate(self) -> Coordinate:
        provider = self.location_provider
        if provider is None:
            raise LocationUnavailable("No location provider configured")

        status = provider.authorization_status()
        if status == AuthorizationStatus.NOT_DETERMINED:
            status = await provider.request_authorization()
        if status in (AuthorizationStatus.DENIED, AuthorizationStatus.RESTRICTED):
            raise LocationPermissionDenied(f"Authorization status: {status}")
        if status != AuthorizationStatus.AUTHORIZED:
            raise LocationUnavailable(f"Unknown authorization status: {status}")
        return await provider.current_location()

    async def _fetch(self, coordinate: Coordinate, city_name: str) -> ViewState:
        self._transition(phase=Phase.FETCHING)
        forecast = await self.forecast_client.fetch_forecast(coordinate)
        logger.info("Forecast ready for %s (%d days)", city_name, len(forecast))
        return self._transition(
            phase=Phase.READY,
            forecast=tuple(forecast),
            city_name=city_name,
            error=None,
        )

    def _fail(self, error: WeatherLookupError) -> ViewState:
        logger.warning("Lookup failed [%s]: %s", error.code, error)
        return self._transition(
            phase=Phase.FAILED,
            error=ErrorState(message=error.user_message, code=error.code),
        )

    def _transition(self, **changes) -> ViewState:
        state = replace(self._state, **changes)
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener %r failed", listener)
        return state

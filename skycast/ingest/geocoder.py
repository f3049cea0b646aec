"""Forward and reverse geocoding.

The view model only depends on the ``Geocoder`` protocol. ``NominatimGeocoder``
implements it against the OpenStreetMap Nominatim API.
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from skycast.config.defaults import DEFAULT_USER_AGENT, NOMINATIM_BASE_URL
from skycast.models.common import Coordinate
from skycast.models.errors import GeoError, GeoErrorKind, GeoNotFound, GeoPartialResult

logger = logging.getLogger(__name__)

LOCALITY_KEYS = ("city", "town", "village", "hamlet", "municipality")


@dataclass(frozen=True)
class GeocodedPlace:
    locality: str | None
    coordinate: Coordinate | None


class Geocoder(Protocol):
    async def forward_geocode(self, name: str) -> GeocodedPlace: ...

    async def reverse_geocode(self, coordinate: Coordinate) -> GeocodedPlace: ...


class NominatimGeocoder:
    def __init__(
        self,
        base_url: str = NOMINATIM_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        language: str = "en",
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.language = language
        self.timeout = timeout

    async def forward_geocode(self, name: str) -> GeocodedPlace:
        """Resolve a place name to its best match.

        Raises GeoNotFound when nothing matches and GeoPartialResult when the
        match carries no usable coordinates.
        """
        data = await self._get(
            "/search",
            {"q": name, "format": "jsonv2", "limit": 1, "addressdetails": 1},
        )
        if not isinstance(data, list):
            raise GeoError(GeoErrorKind.OTHER, "Unexpected Nominatim search response")
        if not data:
            raise GeoNotFound(f"No match for {name!r}")

        best = data[0]
        coordinate = _coordinate_or_none(best)
        if coordinate is None:
            raise GeoPartialResult(f"Match for {name!r} has no coordinates")

        place = GeocodedPlace(locality=_locality(best), coordinate=coordinate)
        logger.info(
            "Geocoded %r to %s (%.4f, %.4f)",
            name, place.locality, coordinate.latitude, coordinate.longitude,
        )
        return place

    async def reverse_geocode(self, coordinate: Coordinate) -> GeocodedPlace:
        data = await self._get(
            "/reverse",
            {
                "lat": coordinate.latitude,
                "lon": coordinate.longitude,
                "format": "jsonv2",
                "addressdetails": 1,
            },
        )
        if not isinstance(data, dict):
            raise GeoError(GeoErrorKind.OTHER, "Unexpected Nominatim reverse response")
        if "error" in data:
            raise GeoNotFound(str(data["error"]), reverse=True)

        place = GeocodedPlace(locality=_locality(data), coordinate=coordinate)
        logger.info(
            "Reverse geocoded (%.4f, %.4f) to %s",
            coordinate.latitude, coordinate.longitude, place.locality,
        )
        return place

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        headers = {"User-Agent": self.user_agent, "Accept-Language": self.language}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, params=params, headers=headers)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            logger.error("Nominatim error for %s: %s", path, e)
            raise GeoError(GeoErrorKind.OTHER, str(e)) from e
        except httpx.RequestError as e:
            logger.error("Nominatim request failed for %s: %s", path, e)
            raise GeoError(GeoErrorKind.NETWORK, str(e)) from e
        except ValueError as e:
            raise GeoError(GeoErrorKind.OTHER, "Nominatim returned invalid JSON") from e


def _coordinate_or_none(result: dict[str, Any]) -> Coordinate | None:
    try:
        return Coordinate(float(result["lat"]), float(result["lon"]))
    except (KeyError, TypeError, ValueError):
        return None


def _locality(result: dict[str, Any]) -> str | None:
    address = result.get("address")
    if isinstance(address, dict):
        for key in LOCALITY_KEYS:
            value = address.get(key)
            if value:
                return str(value)
    name = result.get("name")
    return str(name) if name else None

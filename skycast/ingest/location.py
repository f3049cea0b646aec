"""Device location providers.

A provider owns a small permission state machine (not determined, authorized,
denied, restricted) and hands out a coordinate once authorized.
"""

import logging
from enum import StrEnum
from typing import Protocol

import httpx

from skycast.config.defaults import IPAPI_BASE_URL
from skycast.models.common import Coordinate
from skycast.models.errors import LocationUnavailable

logger = logging.getLogger(__name__)


class AuthorizationStatus(StrEnum):
    NOT_DETERMINED = "not-determined"
    AUTHORIZED = "authorized"
    DENIED = "denied"
    RESTRICTED = "restricted"


class LocationProvider(Protocol):
    def authorization_status(self) -> AuthorizationStatus: ...

    async def request_authorization(self) -> AuthorizationStatus: ...

    async def current_location(self) -> Coordinate: ...


class FixedLocationProvider:
    """Always-authorized provider returning a configured coordinate."""

    def __init__(self, coordinate: Coordinate):
        self.coordinate = coordinate

    def authorization_status(self) -> AuthorizationStatus:
        return AuthorizationStatus.AUTHORIZED

    async def request_authorization(self) -> AuthorizationStatus:
        return AuthorizationStatus.AUTHORIZED

    async def current_location(self) -> Coordinate:
        return self.coordinate


class IpLocationProvider:
    """Approximate location from the public IP address via ipapi.co.

    Authorization starts undetermined; requesting it grants or denies
    according to ``allowed``.
    """

    def __init__(
        self,
        allowed: bool = True,
        base_url: str = IPAPI_BASE_URL,
        timeout: float = 10.0,
    ):
        self.allowed = allowed
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._status = AuthorizationStatus.NOT_DETERMINED

    def authorization_status(self) -> AuthorizationStatus:
        return self._status

    async def request_authorization(self) -> AuthorizationStatus:
        if self._status == AuthorizationStatus.NOT_DETERMINED:
            self._status = (
                AuthorizationStatus.AUTHORIZED if self.allowed
                else AuthorizationStatus.DENIED
            )
            logger.info("IP location authorization: %s", self._status)
        return self._status

    async def current_location(self) -> Coordinate:
        url = f"{self.base_url}/json/"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("IP geolocation failed: %s", e)
            raise LocationUnavailable(str(e)) from e

        if not isinstance(data, dict) or data.get("error"):
            reason = data.get("reason") if isinstance(data, dict) else None
            raise LocationUnavailable(f"IP geolocation error: {reason}")
        try:
            coordinate = Coordinate(float(data["latitude"]), float(data["longitude"]))
        except (KeyError, TypeError, ValueError) as e:
            raise LocationUnavailable("IP geolocation returned no coordinates") from e

        logger.info(
            "Resolved IP location to %s, %s",
            data.get("city"), data.get("country_name"),
        )
        return coordinate

"""Error taxonomy for location resolution and forecast lookup.

Every failure a user action can hit is one of these exceptions. Clients raise
them; the view model turns them into a single ``ErrorState`` with the
``user_message`` of the exception.
"""

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_REQUEST = "INVALID_REQUEST"
    NETWORK_ERROR = "NETWORK_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    GEO_NOT_FOUND = "GEO_NOT_FOUND"
    GEO_PARTIAL_RESULT = "GEO_PARTIAL_RESULT"
    GEO_ERROR = "GEO_ERROR"
    LOCATION_PERMISSION_DENIED = "LOCATION_PERMISSION_DENIED"
    LOCATION_UNAVAILABLE = "LOCATION_UNAVAILABLE"


class NetworkErrorKind(StrEnum):
    NO_CONNECTIVITY = "no-connectivity"
    TIMEOUT = "timeout"
    HOST_UNREACHABLE = "host-unreachable"
    OTHER = "other"


class GeoErrorKind(StrEnum):
    NETWORK = "network"
    OTHER = "other"


class WeatherLookupError(Exception):
    code: ErrorCode
    user_message = "An unknown error occurred. Please try again later."

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.user_message)
        self.detail = detail


class InvalidRequest(WeatherLookupError):
    code = ErrorCode.INVALID_REQUEST
    user_message = "Failed to create URL. Please try again later."


_NETWORK_MESSAGES = {
    NetworkErrorKind.NO_CONNECTIVITY: (
        "No internet connection. Please check your network settings and try again."
    ),
    NetworkErrorKind.TIMEOUT: "The request timed out. Please try again later.",
    NetworkErrorKind.HOST_UNREACHABLE: (
        "Unable to connect to the server. Please try again later."
    ),
    NetworkErrorKind.OTHER: (
        "An unknown network error occurred. Please try again later."
    ),
}


class NetworkError(WeatherLookupError):
    code = ErrorCode.NETWORK_ERROR

    def __init__(self, kind: NetworkErrorKind, detail: str = ""):
        self.kind = kind
        super().__init__(detail)

    @property
    def user_message(self) -> str:
        return _NETWORK_MESSAGES[self.kind]


class DecodeError(WeatherLookupError):
    code = ErrorCode.DECODE_ERROR
    user_message = (
        "Received an unexpected response from the weather service. "
        "Please try again later."
    )


class GeoNotFound(WeatherLookupError):
    code = ErrorCode.GEO_NOT_FOUND

    def __init__(self, detail: str = "", reverse: bool = False):
        self.reverse = reverse
        super().__init__(detail)

    @property
    def user_message(self) -> str:
        if self.reverse:
            return "Failed to determine city name. Please try again later."
        return (
            "No results found for the specified city. "
            "Please check the city name and try again."
        )


class GeoPartialResult(WeatherLookupError):
    code = ErrorCode.GEO_PARTIAL_RESULT
    user_message = (
        "Partial results found for the specified city. "
        "Please provide a more specific city name."
    )


class GeoError(WeatherLookupError):
    code = ErrorCode.GEO_ERROR

    def __init__(self, kind: GeoErrorKind, detail: str = ""):
        self.kind = kind
        super().__init__(detail)

    @property
    def user_message(self) -> str:
        if self.kind == GeoErrorKind.NETWORK:
            return (
                "Network error occurred while fetching city information. "
                "Please try again later."
            )
        return (
            "An unknown error occurred while fetching city information. "
            "Please try again later."
        )


class LocationPermissionDenied(WeatherLookupError):
    code = ErrorCode.LOCATION_PERMISSION_DENIED
    user_message = (
        "Location access denied. "
        "Please enable location services in your device settings."
    )


class LocationUnavailable(WeatherLookupError):
    code = ErrorCode.LOCATION_UNAVAILABLE
    user_message = (
        "Failed to fetch location. "
        "Please check your location settings and try again."
    )

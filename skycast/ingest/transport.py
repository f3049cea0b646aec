"""Classification of httpx transport failures."""

import errno
import socket

import httpx

from skycast.models.errors import NetworkErrorKind

_OFFLINE_ERRNOS = frozenset({errno.ENETUNREACH, errno.ENETDOWN})
# Resolver cannot be reached at all, as opposed to "no such host"
_OFFLINE_GAI_ERRORS = frozenset({socket.EAI_AGAIN})


def _cause_kind(
    exc: BaseException | None, seen: set[int]
) -> NetworkErrorKind | None:
    """Walk an exception chain, descending into exception groups.

    A group (anyio raises one when every address of a host fails) counts as
    offline only when all of its members are offline.
    """
    current = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, BaseExceptionGroup):
            kinds = [_cause_kind(member, seen) for member in current.exceptions]
            if kinds and all(k == NetworkErrorKind.NO_CONNECTIVITY for k in kinds):
                return NetworkErrorKind.NO_CONNECTIVITY
            return NetworkErrorKind.HOST_UNREACHABLE
        if isinstance(current, socket.gaierror):
            if current.errno in _OFFLINE_GAI_ERRORS:
                return NetworkErrorKind.NO_CONNECTIVITY
            return NetworkErrorKind.HOST_UNREACHABLE
        if isinstance(current, OSError) and current.errno in _OFFLINE_ERRNOS:
            return NetworkErrorKind.NO_CONNECTIVITY
        current = current.__cause__ or current.__context__
    return None


def network_error_kind(exc: httpx.TransportError) -> NetworkErrorKind:
    """Map an httpx transport error onto the user-facing network taxonomy."""
    if isinstance(exc, httpx.TimeoutException):
        return NetworkErrorKind.TIMEOUT
    if isinstance(exc, httpx.ConnectError):
        return _cause_kind(exc, set()) or NetworkErrorKind.HOST_UNREACHABLE
    return NetworkErrorKind.OTHER

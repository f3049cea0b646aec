"""Observable view state."""

from dataclasses import dataclass
from enum import StrEnum

from skycast.models.errors import ErrorCode
from skycast.models.forecast import DailyForecast


class Phase(StrEnum):
    IDLE = "idle"
    RESOLVING = "resolving"
    FETCHING = "fetching"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class ErrorState:
    message: str
    code: ErrorCode


@dataclass(frozen=True)
class ViewState:
    phase: Phase = Phase.IDLE
    forecast: tuple[DailyForecast, ...] = ()
    city_name: str = ""
    error: ErrorState | None = None
    search_history: tuple[str, ...] = ()

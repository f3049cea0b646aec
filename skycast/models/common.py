"""Common types and helpers shared across models."""

import math
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)

    @property
    def in_range(self) -> bool:
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0


def today() -> date:
    """Local calendar date; the forecast API resolves timezone itself."""
    return date.today()

"""Domain models shared across loaders and the route engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


def _require_name(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Expected non-empty string for '{field_name}'")
    return value.strip()


def _require_distance(value: int, field_name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"Expected integer for '{field_name}'")
    if value < 0:
        raise ValueError(f"{field_name} must be >= 0, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class BorderEdge:
    """Land border as listed on the subject country's record."""

    country: str
    neighbor: str
    distance_km: int

    def __post_init__(self) -> None:
        _require_name(self.country, "country")
        _require_name(self.neighbor, "neighbor")
        _require_distance(self.distance_km, "distance_km")


@dataclass(frozen=True, slots=True)
class CapitalDistanceEdge:
    """Capital-to-capital distance between two country codes."""

    code_a: str
    code_b: str
    distance_km: int

    def __post_init__(self) -> None:
        _require_name(self.code_a, "code_a")
        _require_name(self.code_b, "code_b")
        _require_distance(self.distance_km, "distance_km")


@dataclass(frozen=True, slots=True)
class NameAlias:
    """Display name to country code pairing from the state-name list."""

    code: str
    name: str


class DistanceFailure(str, Enum):
    UNKNOWN_COUNTRY = "unknown_country"
    NO_SHARED_BORDER = "no_shared_border"
    NO_COUNTRY_CODE = "no_country_code"
    NO_CAPITAL_DISTANCE = "no_capital_distance"


@dataclass(frozen=True, slots=True)
class DistanceResult:
    """Outcome of a capital distance query between two bordering countries."""

    country_a: str
    country_b: str
    distance_km: int | None = None
    failure: DistanceFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None and self.distance_km is not None

    def distance_km_or_sentinel(self) -> int:
        """Return the distance, or -1 when the query failed."""
        return self.distance_km if self.distance_km is not None else -1

    @classmethod
    def found(cls, country_a: str, country_b: str, distance_km: int) -> DistanceResult:
        return cls(country_a=country_a, country_b=country_b, distance_km=distance_km)

    @classmethod
    def not_found(
        cls, country_a: str, country_b: str, failure: DistanceFailure
    ) -> DistanceResult:
        return cls(country_a=country_a, country_b=country_b, failure=failure)


@dataclass(frozen=True, slots=True)
class Hop:
    """One border crossing on a route.

    `capital_km` is the weight the search minimized; `border_km` is the
    border-crossing length shown to users.
    """

    origin: str
    destination: str
    border_km: int
    capital_km: int

    def describe(self) -> str:
        return f"{self.origin} --> {self.destination} ({self.border_km} km)"

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.origin,
            "to": self.destination,
            "border_km": self.border_km,
            "capital_km": self.capital_km,
        }

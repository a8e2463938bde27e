"""Land-border adjacency loading and lookup."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from .models import BorderEdge
from .util import normalize_name, read_lines

LOGGER = logging.getLogger("roadtrip.borders")

RECORD_SEPARATOR = " = "
CLAUSE_SEPARATOR = ";"
DISTANCE_UNIT = " km"

_NON_DIGITS = re.compile(r"[^0-9]")
_EMPTY: Mapping[str, int] = MappingProxyType({})


class BorderParseError(ValueError):
    """Raised when a border record or clause cannot be parsed."""


def parse_border_clause(country: str, clause: str) -> BorderEdge:
    """Parse one `Neighbor Name 1,234 km` clause of `country`'s record."""
    body = clause.strip().split(DISTANCE_UNIT, 1)[0]
    tokens = body.split()
    if len(tokens) < 2:
        raise BorderParseError(
            f"Missing neighbor or distance in clause '{clause.strip()}' for {country}"
        )
    neighbor = " ".join(tokens[:-1])
    digits = _NON_DIGITS.sub("", tokens[-1])
    if not digits:
        raise BorderParseError(f"Error parsing border length for {country} and {neighbor}")
    return BorderEdge(country=country, neighbor=neighbor, distance_km=int(digits))


def parse_border_line(line: str) -> tuple[str, list[BorderEdge], list[str]]:
    """Split a record into its subject, parsed edges and per-clause errors.

    Raises `BorderParseError` when the record has no neighbor section at all.
    """
    parts = line.split(RECORD_SEPARATOR, 1)
    if len(parts) < 2 or not parts[1].strip():
        raise BorderParseError(f"No border information in record '{line.strip()}'")
    country = parts[0].strip()
    if not country:
        raise BorderParseError(f"Missing country name in record '{line.strip()}'")

    edges: list[BorderEdge] = []
    errors: list[str] = []
    for clause in parts[1].split(CLAUSE_SEPARATOR):
        if not clause.strip():
            continue
        try:
            edges.append(parse_border_clause(country, clause))
        except BorderParseError as exc:
            errors.append(str(exc))
    return country, edges, errors


@dataclass(frozen=True, slots=True)
class BorderTable:
    """Directed adjacency as listed per subject country, keyed by display name.

    The reverse of an edge is only present when the neighbor's own record
    lists it.
    """

    adjacency: Mapping[str, Mapping[str, int]]
    issues: tuple[str, ...] = ()
    _lookup: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        frozen = {
            country: MappingProxyType(dict(neighbors))
            for country, neighbors in self.adjacency.items()
        }
        object.__setattr__(self, "adjacency", MappingProxyType(frozen))
        lookup: dict[str, str] = {}
        for country in frozen:
            lookup.setdefault(normalize_name(country), country)
        object.__setattr__(self, "_lookup", MappingProxyType(lookup))

    def __len__(self) -> int:
        return len(self.adjacency)

    def __iter__(self) -> Iterator[str]:
        return iter(self.adjacency)

    def __contains__(self, name: object) -> bool:
        return name in self.adjacency

    @property
    def countries(self) -> tuple[str, ...]:
        return tuple(self.adjacency)

    def has_country(self, name: str) -> bool:
        return name in self.adjacency

    def neighbors(self, country: str) -> Mapping[str, int]:
        return self.adjacency.get(country, _EMPTY)

    def border_distance(self, country: str, neighbor: str) -> int | None:
        return self.neighbors(country).get(neighbor)

    def edges(self) -> Iterator[BorderEdge]:
        for country, neighbors in self.adjacency.items():
            for neighbor, distance_km in neighbors.items():
                yield BorderEdge(country=country, neighbor=neighbor, distance_km=distance_km)

    def resolve_name(self, raw: str) -> str | None:
        """Map user input onto a stored display name, ignoring case and accents."""
        candidate = raw.strip()
        if candidate in self.adjacency:
            return candidate
        return self._lookup.get(normalize_name(candidate))


def build_border_table(lines: Iterable[str]) -> BorderTable:
    adjacency: dict[str, dict[str, int]] = {}
    issues: list[str] = []
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            country, edges, errors = parse_border_line(line)
        except BorderParseError as exc:
            LOGGER.warning("Skipping border record on line %d: %s", lineno, exc)
            issues.append(f"line {lineno}: {exc}")
            continue
        for error in errors:
            LOGGER.warning("Skipping border clause on line %d: %s", lineno, error)
            issues.append(f"line {lineno}: {error}")
        adjacency[country] = {edge.neighbor: edge.distance_km for edge in edges}
    return BorderTable(adjacency=adjacency, issues=tuple(issues))


def load_borders(path: Path) -> BorderTable:
    """Load the border file (`Country = Name 12 km; ...` per line)."""
    table = build_border_table(read_lines(path))
    LOGGER.info("Loaded %d border records from %s", len(table), path)
    return table

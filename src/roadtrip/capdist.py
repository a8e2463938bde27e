"""Capital-to-capital distance matrix keyed by country code."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from .models import CapitalDistanceEdge
from .util import read_lines, split_fields

LOGGER = logging.getLogger("roadtrip.capdist")

FIELD_COUNT = 6
CODE_A_FIELD = 1
CODE_B_FIELD = 3
DISTANCE_FIELD = 4


class CapitalDistanceParseError(ValueError):
    """Raised when a capital distance row cannot be parsed."""


def parse_capdist_row(row: str) -> CapitalDistanceEdge:
    """Parse `numa,ida,numb,idb,kmdist,midist` into an edge."""
    fields = split_fields(row.strip(), ",")
    if len(fields) != FIELD_COUNT:
        raise CapitalDistanceParseError(
            f"Expected {FIELD_COUNT} fields but found {len(fields)}"
        )
    code_a = fields[CODE_A_FIELD].strip()
    code_b = fields[CODE_B_FIELD].strip()
    if not code_a or not code_b:
        raise CapitalDistanceParseError("Missing country code")
    raw_distance = fields[DISTANCE_FIELD].strip()
    try:
        distance_km = int(raw_distance)
    except ValueError as exc:
        raise CapitalDistanceParseError(
            f"Invalid distance '{raw_distance}' for {code_a}-{code_b}"
        ) from exc
    if distance_km < 0:
        raise CapitalDistanceParseError(
            f"Negative distance {distance_km} for {code_a}-{code_b}"
        )
    return CapitalDistanceEdge(code_a=code_a, code_b=code_b, distance_km=distance_km)


@dataclass(frozen=True, slots=True)
class CapitalDistanceTable:
    """Symmetric by construction: every pair is stored in both directions."""

    matrix: Mapping[str, Mapping[str, int]]
    issues: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        frozen = {code: MappingProxyType(dict(row)) for code, row in self.matrix.items()}
        object.__setattr__(self, "matrix", MappingProxyType(frozen))

    def __len__(self) -> int:
        return sum(len(row) for row in self.matrix.values())

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(self.matrix)

    def has_code(self, code: str) -> bool:
        return code in self.matrix

    def distance(self, code_a: str, code_b: str) -> int | None:
        row = self.matrix.get(code_a)
        if row is None:
            return None
        return row.get(code_b)


def build_capital_distance_table(
    lines: Iterable[str], *, skip_header: bool = True
) -> CapitalDistanceTable:
    matrix: dict[str, dict[str, int]] = {}
    issues: list[str] = []
    for lineno, line in enumerate(lines, start=1):
        if skip_header and lineno == 1:
            continue
        if not line.strip():
            continue
        try:
            edge = parse_capdist_row(line)
        except CapitalDistanceParseError as exc:
            LOGGER.warning("Skipping capital distance row on line %d: %s", lineno, exc)
            issues.append(f"line {lineno}: {exc}")
            continue
        matrix.setdefault(edge.code_a, {})[edge.code_b] = edge.distance_km
        matrix.setdefault(edge.code_b, {})[edge.code_a] = edge.distance_km
    return CapitalDistanceTable(matrix=matrix, issues=tuple(issues))


def load_capital_distances(path: Path) -> CapitalDistanceTable:
    """Load the comma-separated capital distance file (header line skipped)."""
    table = build_capital_distance_table(read_lines(path))
    LOGGER.info("Loaded %d directed capital distances from %s", len(table), path)
    return table

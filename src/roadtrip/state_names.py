"""Display name <-> country code aliasing from the state-name list."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from .models import NameAlias
from .util import read_lines, split_fields

LOGGER = logging.getLogger("roadtrip.state_names")

MIN_FIELDS = 5
CODE_FIELD = 1
NAME_FIELD = 2


class StateNameParseError(ValueError):
    """Raised when a state-name row cannot be parsed."""


def parse_state_name_row(row: str) -> NameAlias:
    """Parse a tab-separated `statenum, stateid, countryname, start, end` row."""
    fields = split_fields(row.rstrip("\r\n"), "\t")
    if len(fields) < MIN_FIELDS:
        raise StateNameParseError(
            f"Expected at least {MIN_FIELDS} fields but found {len(fields)}"
        )
    code = fields[CODE_FIELD].strip()
    name = fields[NAME_FIELD].strip()
    if not code or not name:
        raise StateNameParseError("Missing country code or name")
    return NameAlias(code=code, name=name)


@dataclass(frozen=True, slots=True)
class NameAliasTable:
    """One code per display name; a code may be reached from several names."""

    codes_by_name: Mapping[str, str]
    issues: tuple[str, ...] = ()
    _names_by_code: Mapping[str, tuple[str, ...]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "codes_by_name", MappingProxyType(dict(self.codes_by_name)))
        names_by_code: dict[str, list[str]] = {}
        for name, code in self.codes_by_name.items():
            names_by_code.setdefault(code, []).append(name)
        object.__setattr__(
            self,
            "_names_by_code",
            MappingProxyType({code: tuple(names) for code, names in names_by_code.items()}),
        )

    def __len__(self) -> int:
        return len(self.codes_by_name)

    def __contains__(self, name: object) -> bool:
        return name in self.codes_by_name

    def code_of(self, display_name: str) -> str | None:
        return self.codes_by_name.get(display_name)

    def names_for(self, code: str) -> tuple[str, ...]:
        return self._names_by_code.get(code, ())


def build_name_alias_table(
    lines: Iterable[str], *, skip_header: bool = True
) -> NameAliasTable:
    """Build the alias table; a repeated display name keeps its last code."""
    codes_by_name: dict[str, str] = {}
    issues: list[str] = []
    for lineno, line in enumerate(lines, start=1):
        if skip_header and lineno == 1:
            continue
        if not line.strip():
            continue
        try:
            alias = parse_state_name_row(line)
        except StateNameParseError as exc:
            LOGGER.warning("Skipping state name row on line %d: %s", lineno, exc)
            issues.append(f"line {lineno}: {exc}")
            continue
        previous = codes_by_name.get(alias.name)
        if previous is not None and previous != alias.code:
            LOGGER.debug(
                "State name '%s' remapped from %s to %s on line %d",
                alias.name,
                previous,
                alias.code,
                lineno,
            )
        codes_by_name[alias.name] = alias.code
    return NameAliasTable(codes_by_name=codes_by_name, issues=tuple(issues))


def load_state_names(path: Path) -> NameAliasTable:
    """Load the tab-separated state-name file (header line skipped)."""
    table = build_name_alias_table(read_lines(path))
    LOGGER.info("Loaded %d country name aliases from %s", len(table), path)
    return table

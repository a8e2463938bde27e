"""Consistency report across the three loaded country tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .engine import RouteEngine
from .util import names_match


@dataclass(slots=True)
class LoadReport:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    infos: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def add_info(self, msg: str) -> None:
        self.infos.append(msg)


class Validator:
    """Reports how well the border, capital and name tables line up."""

    def __init__(self, engine: RouteEngine) -> None:
        self.engine = engine

    def run(self) -> LoadReport:
        report = LoadReport()
        self._report_counts(report)
        self._report_skipped(report)
        self._report_border_symmetry(report)
        self._report_unresolved_names(report)
        self._report_missing_capital_distances(report)
        return report

    def _report_counts(self, report: LoadReport) -> None:
        borders = self.engine.borders
        report.add_info(f"Loaded {len(borders)} border records")
        report.add_info(f"Loaded {len(self.engine.capitals)} directed capital distances")
        report.add_info(f"Loaded {len(self.engine.aliases)} country name aliases")
        if not len(borders):
            report.add_error("Border table is empty")
        if not len(self.engine.capitals):
            report.add_error("Capital distance table is empty")
        if not len(self.engine.aliases):
            report.add_error("Country name table is empty")

    def _report_skipped(self, report: LoadReport) -> None:
        sources = (
            ("borders", self.engine.borders.issues),
            ("capital distances", self.engine.capitals.issues),
            ("country names", self.engine.aliases.issues),
        )
        for label, issues in sources:
            for issue in issues:
                report.add_warning(f"Skipped in {label}: {issue}")

    def _report_border_symmetry(self, report: LoadReport) -> None:
        borders = self.engine.borders
        for edge in borders.edges():
            if not borders.has_country(edge.neighbor):
                report.add_warning(
                    f"{edge.country} lists neighbor '{edge.neighbor}' which has no border record"
                )
                continue
            reverse = borders.border_distance(edge.neighbor, edge.country)
            if reverse is None:
                report.add_warning(f"{edge.country} -> {edge.neighbor} has no reverse border entry")
            elif reverse != edge.distance_km:
                report.add_warning(
                    f"{edge.country} -> {edge.neighbor} is {edge.distance_km} km "
                    f"but the reverse entry is {reverse} km"
                )

    def _report_unresolved_names(self, report: LoadReport) -> None:
        aliases = self.engine.aliases
        for country in sorted(self.engine.borders.countries):
            if aliases.code_of(country) is not None:
                continue
            near = [name for name in aliases.codes_by_name if names_match(name, country)]
            if near:
                report.add_warning(
                    f"No country code for '{country}'; similar names: {', '.join(sorted(near))}"
                )
            else:
                report.add_warning(f"No country code for '{country}'")

    def _report_missing_capital_distances(self, report: LoadReport) -> None:
        for country in sorted(self.engine.borders.countries):
            code = self.engine.aliases.code_of(country)
            if code is not None and not self.engine.capitals.has_code(code):
                report.add_warning(f"No capital distances for '{country}' ({code})")


def format_report_lines(report: LoadReport) -> Iterable[str]:
    for info in report.infos:
        yield f"[INFO] {info}"
    for warning in report.warnings:
        yield f"[WARN] {warning}"
    for error in report.errors:
        yield f"[ERROR] {error}"
    if report.ok:
        yield "[OK] Input tables loaded with no errors."

"""Pytest fixtures building small country tables on disk and in memory."""
from __future__ import annotations

from pathlib import Path

import pytest

from roadtrip.borders import build_border_table
from roadtrip.capdist import build_capital_distance_table
from roadtrip.engine import RouteEngine
from roadtrip.state_names import build_name_alias_table

CAPDIST_HEADER = "numa,ida,numb,idb,kmdist,midist"
STATE_NAME_HEADER = "statenum\tstateid\tcountryname\tstart\tend"


def make_engine(
    border_lines: list[str],
    capdist_rows: list[str],
    state_rows: list[tuple[str, str]],
) -> RouteEngine:
    """Engine from border lines, `code_a,code_b,km` triples and `(code, name)` pairs."""
    capdist_lines = [CAPDIST_HEADER]
    for idx, row in enumerate(capdist_rows):
        code_a, code_b, km = row.split(",")
        capdist_lines.append(f"{idx},{code_a},{idx + 100},{code_b},{km},0")
    state_lines = [STATE_NAME_HEADER]
    for idx, (code, name) in enumerate(state_rows):
        state_lines.append(f"{idx}\t{code}\t{name}\t1816-01-01\t2020-12-31")
    return RouteEngine(
        build_border_table(border_lines),
        build_capital_distance_table(capdist_lines),
        build_name_alias_table(state_lines),
    )


@pytest.fixture
def chain_engine() -> RouteEngine:
    """A - B - C chain with a direct A/C border that has no capital distance."""
    return make_engine(
        [
            "Aland = Bland 10 km; Cland 5 km",
            "Bland = Aland 10 km; Cland 20 km",
            "Cland = Bland 20 km; Aland 5 km",
        ],
        ["AAA,BBB,15", "BBB,CCC,25"],
        [("AAA", "Aland"), ("BBB", "Bland"), ("CCC", "Cland")],
    )


@pytest.fixture
def data_files(tmp_path: Path) -> dict[str, Path]:
    borders = tmp_path / "borders.txt"
    borders.write_text(
        "\n".join(
            [
                "Afghanistan = China 91 km; Iran 921 km; Pakistan 2,670 km",
                "China = Afghanistan 91 km; Pakistan 438 km",
                "Iran = Afghanistan 921 km; Pakistan 959 km",
                "Pakistan = Afghanistan 2,670 km; China 438 km; Iran 959 km",
                "Sri Lanka = ",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    capdist = tmp_path / "capdist.csv"
    capdist.write_text(
        "\n".join(
            [
                CAPDIST_HEADER,
                "700,AFG,710,CHN,2389,1485",
                "700,AFG,630,IRN,1772,1101",
                "700,AFG,770,PAK,378,235",
                "710,CHN,770,PAK,3886,2415",
                "630,IRN,770,PAK,2118,1316",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    state_names = tmp_path / "state_name.tsv"
    state_names.write_text(
        "\n".join(
            [
                STATE_NAME_HEADER,
                "630\tIRN\tIran\t1816-01-01\t2020-12-31",
                "700\tAFG\tAfghanistan\t1919-01-01\t2020-12-31",
                "710\tCHN\tChina\t1816-01-01\t2020-12-31",
                "770\tPAK\tPakistan\t1947-08-14\t2020-12-31",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    return {"borders": borders, "capdist": capdist, "state_names": state_names}

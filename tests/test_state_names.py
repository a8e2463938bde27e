import pytest

from roadtrip.state_names import (
    StateNameParseError,
    build_name_alias_table,
    load_state_names,
    parse_state_name_row,
)

HEADER = "statenum\tstateid\tcountryname\tstart\tend"


def test_parse_row_strips_fields():
    alias = parse_state_name_row("2\t USA \t United States of America \t1816-01-01\t2020-12-31\n")
    assert alias.code == "USA"
    assert alias.name == "United States of America"


def test_short_rows_are_rejected():
    with pytest.raises(StateNameParseError):
        parse_state_name_row("2\tUSA\tUnited States of America\t1816-01-01")


def test_short_rows_are_skipped_during_load():
    table = build_name_alias_table(
        [HEADER, "2\tUSA\tUnited States\t1816-01-01", "20\tCAN\tCanada\t1920-01-10\t2020-12-31"]
    )
    assert table.code_of("United States") is None
    assert table.code_of("Canada") == "CAN"
    assert len(table.issues) == 1


def test_header_is_skipped():
    table = build_name_alias_table(["2\tUSA\tUnited States\t1816-01-01\t2020-12-31"])
    assert len(table) == 0


def test_later_rows_overwrite_earlier_ones():
    table = build_name_alias_table(
        [
            HEADER,
            "260\tGFR\tGermany\t1955-05-05\t1990-10-02",
            "255\tGMY\tGermany\t1990-10-03\t2020-12-31",
        ]
    )
    assert table.code_of("Germany") == "GMY"
    assert table.names_for("GMY") == ("Germany",)
    assert table.names_for("GFR") == ()


def test_code_reached_from_several_names():
    table = build_name_alias_table(
        [
            HEADER,
            "780\tSRI\tSri Lanka\t1948-02-04\t2020-12-31",
            "780\tSRI\tCeylon\t1948-02-04\t1972-05-22",
        ]
    )
    assert table.names_for("SRI") == ("Sri Lanka", "Ceylon")
    assert "Ceylon" in table


def test_load_state_names(data_files):
    table = load_state_names(data_files["state_names"])
    assert table.code_of("Afghanistan") == "AFG"
    assert len(table) == 4


def test_trailing_empty_fields_are_dropped_before_counting():
    with pytest.raises(StateNameParseError):
        parse_state_name_row("2\tUSA\tUnited States\t1816-01-01\t")
    alias = parse_state_name_row("2\tUSA\tUnited States\t1816-01-01\t2020-12-31\t\t")
    assert alias.code == "USA"

"""Utility helpers for logging, text input, and JSON output."""

from __future__ import annotations

import json
import logging
import unicodedata
from pathlib import Path
from typing import Any


LOGGER = logging.getLogger("roadtrip.util")

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(log_file: Path | None = None, verbose: bool = False) -> None:
    """Configure root logging to console and optionally a file."""
    level = logging.DEBUG if verbose else logging.INFO
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def read_lines(path: Path) -> list[str]:
    """Read a text file line by line, decoding each line as UTF-8 on its own.

    A line that is not valid UTF-8 is logged and replaced by an empty line so
    it is skipped without shifting the line numbers of the records after it.
    """
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    lines: list[str] = []
    with path.open("rb") as fh:
        for lineno, raw in enumerate(fh, start=1):
            try:
                lines.append(raw.decode("utf-8").rstrip("\r\n"))
            except UnicodeDecodeError as exc:
                LOGGER.warning("Skipping undecodable line %d in %s: %s", lineno, path, exc)
                lines.append("")
    return lines


def split_fields(row: str, sep: str) -> list[str]:
    """Split a delimited row, dropping trailing empty fields."""
    fields = row.split(sep)
    while fields and fields[-1] == "":
        fields.pop()
    return fields


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, sort_keys=True, ensure_ascii=False)
        fh.write("\n")


def normalize_name(value: str) -> str:
    """Fold case and diacritics and drop punctuation for name matching."""
    folded = unicodedata.normalize("NFKD", value)
    without_marks = "".join(ch for ch in folded if not unicodedata.combining(ch))
    return "".join(ch for ch in without_marks.casefold() if ch.isalnum())


def names_match(left: str, right: str) -> bool:
    return normalize_name(left) == normalize_name(right)

"""Typed configuration loader for `config.yaml`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, cast

import yaml


def _mapping(value: Any, field_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"Expected mapping for '{field_name}'")
    return cast(Mapping[str, Any], value)


def _str(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Expected non-empty string for '{field_name}'")
    return value.strip()


def _bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Expected bool for '{field_name}'")
    return value


def _path_from_cfg(value: Any, field_name: str, root_dir: Path) -> Path:
    raw = _str(value, field_name)
    p = Path(raw)
    return p if p.is_absolute() else root_dir / p


@dataclass(frozen=True, slots=True)
class PathsConfig:
    borders: Path
    capdist: Path
    state_names: Path
    logs_dir: Path | None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], root_dir: Path) -> PathsConfig:
        logs_raw = raw.get("logs_dir")
        return cls(
            borders=_path_from_cfg(raw.get("borders"), "paths.borders", root_dir),
            capdist=_path_from_cfg(raw.get("capdist"), "paths.capdist", root_dir),
            state_names=_path_from_cfg(raw.get("state_names"), "paths.state_names", root_dir),
            logs_dir=(
                _path_from_cfg(logs_raw, "paths.logs_dir", root_dir)
                if logs_raw is not None
                else None
            ),
        )


@dataclass(frozen=True, slots=True)
class SessionConfig:
    exit_keyword: str
    lenient_names: bool

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> SessionConfig:
        return cls(
            exit_keyword=_str(raw.get("exit_keyword", "EXIT"), "session.exit_keyword"),
            lenient_names=_bool(raw.get("lenient_names", True), "session.lenient_names"),
        )

    @classmethod
    def default(cls) -> SessionConfig:
        return cls(exit_keyword="EXIT", lenient_names=True)


@dataclass(frozen=True, slots=True)
class AppConfig:
    source_path: Path | None
    paths: PathsConfig
    session: SessionConfig

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], source_path: Path) -> AppConfig:
        root_dir = source_path.parent.resolve()
        session_raw = raw.get("session")
        return cls(
            source_path=source_path.resolve(),
            paths=PathsConfig.from_mapping(_mapping(raw.get("paths"), "paths"), root_dir),
            session=(
                SessionConfig.default()
                if session_raw is None
                else SessionConfig.from_mapping(_mapping(session_raw, "session"))
            ),
        )

    @classmethod
    def from_files(
        cls,
        borders: str | Path,
        capdist: str | Path,
        state_names: str | Path,
        *,
        session: SessionConfig | None = None,
    ) -> AppConfig:
        """Config for the three input files given directly, without a YAML file."""
        return cls(
            source_path=None,
            paths=PathsConfig(
                borders=Path(borders).resolve(),
                capdist=Path(capdist).resolve(),
                state_names=Path(state_names).resolve(),
                logs_dir=None,
            ),
            session=session or SessionConfig.default(),
        )


def load_config(path: str | Path) -> AppConfig:
    """Load and validate the YAML config file into typed settings."""
    cfg_path = Path(path).resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    if not isinstance(raw, Mapping):
        raise ValueError("Top-level config must be a YAML mapping")
    return AppConfig.from_mapping(cast(Mapping[str, Any], raw), cfg_path)

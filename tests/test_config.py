from pathlib import Path

import pytest

from roadtrip.config import AppConfig, load_config
from roadtrip.engine import RouteEngine


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_relative_paths_resolve_against_config_dir(tmp_path: Path):
    cfg_path = _write(
        tmp_path / "config.yaml",
        "paths:\n"
        "  borders: data/borders.txt\n"
        "  capdist: data/capdist.csv\n"
        "  state_names: /srv/state_name.tsv\n"
        "session:\n"
        "  exit_keyword: quit\n"
        "  lenient_names: false\n",
    )
    cfg = load_config(cfg_path)
    assert cfg.paths.borders == tmp_path.resolve() / "data" / "borders.txt"
    assert cfg.paths.state_names == Path("/srv/state_name.tsv")
    assert cfg.paths.logs_dir is None
    assert cfg.session.exit_keyword == "quit"
    assert cfg.session.lenient_names is False


def test_session_defaults(tmp_path: Path):
    cfg_path = _write(
        tmp_path / "config.yaml",
        "paths:\n  borders: b.txt\n  capdist: c.csv\n  state_names: s.tsv\n  logs_dir: logs\n",
    )
    cfg = load_config(cfg_path)
    assert cfg.session.exit_keyword == "EXIT"
    assert cfg.session.lenient_names is True
    assert cfg.paths.logs_dir == tmp_path.resolve() / "logs"


def test_missing_config_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "text",
    [
        "- not a mapping\n",
        "paths: []\n",
        "paths:\n  borders: b.txt\n  capdist: c.csv\n",
        "paths:\n  borders: b.txt\n  capdist: c.csv\n  state_names: s.tsv\nsession:\n  lenient_names: maybe\n",
    ],
)
def test_invalid_config(tmp_path: Path, text: str):
    cfg_path = _write(tmp_path / "config.yaml", text)
    with pytest.raises(ValueError):
        load_config(cfg_path)


def test_engine_from_files_config(data_files):
    cfg = AppConfig.from_files(
        data_files["borders"], data_files["capdist"], data_files["state_names"]
    )
    assert cfg.source_path is None
    engine = RouteEngine.from_config(cfg)
    assert engine.get_distance("Afghanistan", "China").distance_km == 2389

"""CLI entrypoint for the roadtrip route finder."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, Sequence

from .config import AppConfig, SessionConfig, load_config
from .engine import RouteEngine, total_capital_km
from .util import setup_logging, write_json
from .validate import Validator, format_report_lines

LOGGER = logging.getLogger("roadtrip.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roadtrip",
        description="Shortest capital-to-capital road trips across land borders.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--config", default="config.yaml", help="Path to YAML config.")
        p.add_argument("--borders", default=None, help="Border file; overrides the config.")
        p.add_argument("--capdist", default=None, help="Capital distance CSV; overrides the config.")
        p.add_argument(
            "--state-names",
            default=None,
            help="State name TSV; overrides the config.",
        )
        p.add_argument("--verbose", action="store_true", help="Enable debug logs.")

    interactive_p = subparsers.add_parser(
        "interactive",
        help="Prompt for pairs of countries and print the route between them.",
    )
    add_common(interactive_p)

    distance_p = subparsers.add_parser(
        "distance",
        help="Capital distance between two bordering countries.",
    )
    add_common(distance_p)
    distance_p.add_argument("country_a")
    distance_p.add_argument("country_b")

    path_p = subparsers.add_parser("path", help="Shortest route between two countries.")
    add_common(path_p)
    path_p.add_argument("country_a")
    path_p.add_argument("country_b")
    path_p.add_argument(
        "--output",
        default=None,
        help="Also write the route with both distance metrics to this JSON file.",
    )

    validate_p = subparsers.add_parser(
        "validate",
        help="Report skipped records and mismatches between the input tables.",
    )
    add_common(validate_p)

    return parser


def _resolve_config(args: argparse.Namespace) -> AppConfig:
    overrides = (args.borders, args.capdist, args.state_names)
    if all(item is not None for item in overrides):
        return AppConfig.from_files(args.borders, args.capdist, args.state_names)
    if any(item is not None for item in overrides):
        raise ValueError("--borders, --capdist and --state-names must be given together")
    return load_config(args.config)


def _load_and_setup(args: argparse.Namespace) -> AppConfig:
    cfg = _resolve_config(args)
    log_path = cfg.paths.logs_dir / "roadtrip.log" if cfg.paths.logs_dir is not None else None
    setup_logging(log_path, verbose=args.verbose)
    return cfg


def _resolve_country(engine: RouteEngine, session: SessionConfig, raw: str) -> str | None:
    if session.lenient_names:
        return engine.borders.resolve_name(raw)
    name = raw.strip()
    return name if engine.borders.has_country(name) else None


def format_route_lines(country_a: str, country_b: str, steps: Sequence[str]) -> list[str]:
    if not steps:
        return [f"No path found between {country_a} and {country_b}."]
    return [f"Route from {country_a} to {country_b}:", *(f"* {step}" for step in steps)]


def run_session(
    engine: RouteEngine,
    session: SessionConfig,
    *,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> None:
    """Interactive loop; ends on the exit keyword or end of input."""
    exit_keyword = session.exit_keyword.casefold()
    prompt = "Enter the name of the {} country (type {} to quit): "

    def ask(ordinal: str) -> str | None:
        try:
            raw = input_fn(prompt.format(ordinal, session.exit_keyword)).strip()
        except EOFError:
            return None
        if raw.casefold() == exit_keyword:
            return None
        return raw

    while True:
        raw_a = ask("first")
        if raw_a is None:
            break
        country_a = _resolve_country(engine, session, raw_a)
        if country_a is None:
            output_fn("Invalid country name. Please enter a valid country name.")
            continue

        raw_b = ask("second")
        if raw_b is None:
            break
        country_b = _resolve_country(engine, session, raw_b)
        if country_b is None:
            output_fn("Invalid country name. Please enter a valid country name.")
            continue

        for line in format_route_lines(country_a, country_b, engine.find_path(country_a, country_b)):
            output_fn(line)


def _run_distance(cfg: AppConfig, engine: RouteEngine, *, country_a: str, country_b: str) -> int:
    name_a = _resolve_country(engine, cfg.session, country_a) or country_a.strip()
    name_b = _resolve_country(engine, cfg.session, country_b) or country_b.strip()
    result = engine.get_distance(name_a, name_b)
    if not result.ok:
        LOGGER.error(
            "No capital distance between %s and %s (%s)",
            name_a,
            name_b,
            result.failure.value if result.failure else "unknown",
        )
        return 1
    print(f"{name_a} --> {name_b}: {result.distance_km} km")
    return 0


def _run_path(
    cfg: AppConfig,
    engine: RouteEngine,
    *,
    country_a: str,
    country_b: str,
    output: str | None,
) -> int:
    name_a = _resolve_country(engine, cfg.session, country_a) or country_a.strip()
    name_b = _resolve_country(engine, cfg.session, country_b) or country_b.strip()
    route = engine.find_route(name_a, name_b)
    for line in format_route_lines(name_a, name_b, [hop.describe() for hop in route]):
        print(line)

    if output is not None:
        output_path = Path(output)
        write_json(
            output_path,
            {
                "from": name_a,
                "to": name_b,
                "found": bool(route),
                "hops": [hop.to_dict() for hop in route],
                "total_border_km": sum(hop.border_km for hop in route),
                "total_capital_km": total_capital_km(route),
            },
        )
        LOGGER.info("Route written to %s", output_path)
    return 0 if route else 1


def _run_validate(engine: RouteEngine) -> int:
    report = Validator(engine).run()
    for line in format_report_lines(report):
        LOGGER.info(line)
    return 0 if report.ok else 1


def _dispatch(args: argparse.Namespace) -> int:
    try:
        cfg = _load_and_setup(args)
    except (FileNotFoundError, ValueError) as exc:
        setup_logging(verbose=bool(args.verbose))
        LOGGER.error("Error reading config: %s", exc)
        return 1
    try:
        engine = RouteEngine.from_config(cfg)
    except FileNotFoundError as exc:
        LOGGER.error("Error reading input: %s", exc)
        return 1

    command = str(args.command)
    if command == "interactive":
        run_session(engine, cfg.session)
        return 0
    if command == "distance":
        return _run_distance(cfg, engine, country_a=args.country_a, country_b=args.country_b)
    if command == "path":
        return _run_path(
            cfg,
            engine,
            country_a=args.country_a,
            country_b=args.country_b,
            output=args.output,
        )
    if command == "validate":
        return _run_validate(engine)
    raise ValueError(f"Unknown command: {command}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return _dispatch(args)


if __name__ == "__main__":
    raise SystemExit(main())

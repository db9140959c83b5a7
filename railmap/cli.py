"""`railmap` command line: validate, export and create map files.

Run:
  railmap validate maps/korea.json --audit --metrics
  railmap export maps/korea.json --format csv -o exports/korea.csv
  railmap new -o maps/untitled.json
  railmap sample south-korea -o maps/korea.json
"""

from __future__ import annotations

import argparse
import logging

from railmap.core.cli_utils import add_map_argument, add_output_flag, create_base_parser
from railmap.core.config import configure_logging, load_config
from railmap.data.maps import DEFAULT_MAP_ID, MAP_COLLECTION, get_bundled_map
from railmap.derived.attributes import audit_derived_attributes
from railmap.graph.metrics import compute_network_metrics
from railmap.io import ImportResult, import_map_file, map_to_json, write_text
from railmap.io.export import EXPORT_FORMATS, export_map, render_map
from railmap.models.report import count_by_severity
from railmap.models.schemas import GameMap, create_default_map

LOGGER = logging.getLogger("railmap")


def _parse_args(argv: list[str] | None) -> tuple[argparse.ArgumentParser, argparse.Namespace]:
    parser = create_base_parser("Validate, export and create rail-network map files.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Print the validation report for a map file.")
    add_map_argument(p_validate)
    p_validate.add_argument(
        "--audit",
        action="store_true",
        help="Also report stations whose platforms/type/services differ from their tracks.",
    )
    p_validate.add_argument("--metrics", action="store_true", help="Print network metrics.")

    p_export = sub.add_parser("export", help="Export a map as JSON, TypeScript or stations CSV.")
    add_map_argument(p_export)
    p_export.add_argument("--format", choices=EXPORT_FORMATS, default="json")
    p_export.add_argument(
        "--force", action="store_true", help="Export even when the map has validation errors."
    )
    add_output_flag(p_export, help_text="Output file (default: stdout).")

    p_new = sub.add_parser("new", help="Write a fresh, empty map.")
    add_output_flag(p_new, help_text="Output file (default: stdout).")

    p_sample = sub.add_parser("sample", help="Write one of the bundled sample maps.")
    p_sample.add_argument("map_id", nargs="?", default=DEFAULT_MAP_ID, choices=sorted(MAP_COLLECTION))
    add_output_flag(p_sample, help_text="Output file (default: stdout).")

    return parser, parser.parse_args(argv)


def _load(parser: argparse.ArgumentParser, args: argparse.Namespace) -> ImportResult:
    if not args.map_file.exists():
        parser.error(f"map file not found: {args.map_file}")
    return import_map_file(args.map_file)


def _print_report(result: ImportResult) -> None:
    for finding in result.report:
        print(finding)
    counts = count_by_severity(result.report)
    print(f"{counts['error']} error(s), {counts['warning']} warning(s), {counts['info']} info")


def _write_or_print(text: str, args: argparse.Namespace) -> None:
    if args.output is None:
        print(text, end="" if text.endswith("\n") else "\n")
    else:
        write_text(args.output, text)
        LOGGER.info("Wrote %s", args.output)


def _cmd_validate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    result = _load(parser, args)
    if result.game_map is None:
        print(f"Rejected: {result.reason}")
        return 1

    _print_report(result)
    game_map: GameMap = result.game_map
    if args.audit:
        for finding in audit_derived_attributes(game_map):
            print(finding)
    if args.metrics:
        metrics = compute_network_metrics(
            game_map.rail_network.stations, game_map.rail_network.tracks
        )
        print(metrics.to_string(index=False))
    return 0 if result.ok else 1


def _cmd_export(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    result = _load(parser, args)
    if result.game_map is None:
        print(f"Rejected: {result.reason}")
        return 1
    if not result.ok and not args.force:
        _print_report(result)
        print("Fix validation errors before exporting (or pass --force).")
        return 1

    if args.output is None:
        _write_or_print(render_map(result.game_map, args.format), args)
    else:
        export_map(result.game_map, args.output, args.format, force=args.force)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser, args = _parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    config = load_config(args.config)

    if args.command == "validate":
        return _cmd_validate(parser, args)
    if args.command == "export":
        return _cmd_export(parser, args)
    if args.command == "new":
        _write_or_print(map_to_json(create_default_map(config)), args)
        return 0
    if args.command == "sample":
        _write_or_print(map_to_json(get_bundled_map(args.map_id)), args)
        return 0
    parser.error(f"unknown command {args.command!r}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())

"""Common CLI utilities for the `railmap` command."""

from __future__ import annotations

import argparse
from pathlib import Path


def create_base_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML editor config (grid size, default map name, storage path).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level.",
    )
    return parser


def add_output_flag(parser: argparse.ArgumentParser, *, help_text: str) -> None:
    parser.add_argument("-o", "--output", type=Path, default=None, help=help_text)


def add_map_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("map_file", type=Path, help="Path to a map JSON file.")

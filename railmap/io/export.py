"""Export formats: JSON, a TypeScript source literal, and a stations-only CSV.

The CSV projection is lossy by intent: it carries stations only, no tracks.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from railmap.io import map_to_json, serialize_map, write_text
from railmap.models.report import has_errors
from railmap.models.schemas import GameMap, Station
from railmap.validation.validator import validate_map

LOGGER = logging.getLogger(__name__)

EXPORT_FORMATS: tuple[str, ...] = ("json", "csv", "ts")
STATION_CSV_COLUMNS: tuple[str, ...] = (
    "id",
    "name",
    "type",
    "x",
    "y",
    "importance",
    "platforms",
    "services",
)


def stations_to_frame(stations: Sequence[Station]) -> pd.DataFrame:
    rows = [
        {
            "id": s.id,
            "name": s.name,
            "type": s.type.value,
            "x": s.coordinates.x,
            "y": s.coordinates.y,
            "importance": s.importance,
            "platforms": s.platforms,
            "services": ";".join(v.value for v in s.services),
        }
        for s in stations
    ]
    return pd.DataFrame(rows, columns=list(STATION_CSV_COLUMNS))


def stations_to_csv(stations: Sequence[Station]) -> str:
    return stations_to_frame(stations).to_csv(index=False)


def export_name_for(map_id: str) -> str:
    """camelCase identifier for a map id, e.g. "south-korea" -> "southKoreaMap"."""
    words = [w for w in re.split(r"[^0-9A-Za-z]+", map_id) if w]
    if not words:
        return "gameMap"
    head, *tail = words
    name = head.lower() + "".join(w[:1].upper() + w[1:].lower() for w in tail) + "Map"
    return f"_{name}" if name[0].isdigit() else name


def map_to_typescript(game_map: GameMap, export_name: str | None = None) -> str:
    name = export_name or export_name_for(game_map.id)
    body = json.dumps(serialize_map(game_map), ensure_ascii=False, indent=2)
    return (
        "import { GameMap } from '@/lib/types/metro-types';\n\n"
        f"export const {name}: GameMap = {body};\n"
    )


def render_map(game_map: GameMap, fmt: str) -> str:
    if fmt == "json":
        return map_to_json(game_map)
    if fmt == "csv":
        return stations_to_csv(game_map.rail_network.stations)
    if fmt == "ts":
        return map_to_typescript(game_map)
    raise ValueError(f"Unknown export format {fmt!r}; expected one of {EXPORT_FORMATS}")


def export_map(game_map: GameMap, path: Path, fmt: str = "json", *, force: bool = False) -> Path:
    """Write `game_map` to `path`. Maps with validation errors are refused unless `force`."""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format {fmt!r}; expected one of {EXPORT_FORMATS}")
    if not force and has_errors(validate_map(game_map)):
        raise ValueError(f"Map {game_map.id!r} has validation errors; fix them before exporting.")

    path = Path(path)
    write_text(path, render_map(game_map, fmt))
    LOGGER.info("Exported map %r as %s to %s", game_map.id, fmt, path)
    return path

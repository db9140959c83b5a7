"""Lightweight I/O helpers and the import boundary.

This module centralises:
- plain JSON/text helpers used by the CLI, storage and exporters
- `serialize_map` / `parse_map` (lossless GameMap <-> JSON-ready data)
- `import_map`: shape check, schema parse and validation gate for untrusted input
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from railmap.models.report import Severity, ValidationError, has_errors
from railmap.models.schemas import GameMap
from railmap.validation.validator import validate_map

LOGGER = logging.getLogger(__name__)

# Keys (and their JSON types) a value needs before it is treated as a map at all.
REQUIRED_MAP_KEYS: tuple[tuple[str, type], ...] = (
    ("id", str),
    ("metadata", dict),
    ("railNetwork", dict),
)


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def write_text(path: Path, text: str) -> None:
    ensure_parent_dir(path)
    path.write_text(text, encoding="utf-8")


def _drop_absent(model: BaseModel, data: dict[str, Any]) -> dict[str, Any]:
    # Only declared fields are pruned; unknown keys are kept verbatim, nulls included.
    for name, info in type(model).model_fields.items():
        key = info.alias or name
        value = getattr(model, name)
        if value is None:
            data.pop(key, None)
        elif isinstance(value, BaseModel):
            _drop_absent(value, data[key])
        elif isinstance(value, list):
            for item, raw in zip(value, data[key]):
                if isinstance(item, BaseModel):
                    _drop_absent(item, raw)
    return data


def serialize_map(game_map: GameMap) -> dict[str, Any]:
    """Plain, JSON-ready data with wire (camelCase) names; absent optionals are omitted."""
    return _drop_absent(game_map, json.loads(game_map.model_dump_json(by_alias=True)))


def map_to_json(game_map: GameMap, *, indent: int | None = 2) -> str:
    return json.dumps(serialize_map(game_map), ensure_ascii=False, indent=indent)


def parse_map(data: Mapping[str, Any]) -> GameMap:
    """Build a `GameMap` from serialized data. Raises pydantic's ValidationError on bad input."""
    return GameMap.model_validate(data)


def check_map_shape(raw: Any) -> str | None:
    """Return a reason string when `raw` lacks the minimal map shape, else None."""
    if not isinstance(raw, dict):
        return f"expected a JSON object, got {type(raw).__name__}"
    for key, expected in REQUIRED_MAP_KEYS:
        if key not in raw:
            return f"missing required key {key!r}"
        if not isinstance(raw[key], expected):
            return f"key {key!r} must be a JSON {'string' if expected is str else 'object'}"
    return None


def _schema_reason(exc: SchemaError, limit: int = 5) -> str:
    parts = []
    for err in exc.errors()[:limit]:
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}")
    more = exc.error_count() - limit
    suffix = f" (+{more} more)" if more > 0 else ""
    return "schema mismatch: " + "; ".join(parts) + suffix


@dataclass(frozen=True)
class ImportResult:
    ok: bool
    game_map: GameMap | None = None
    report: list[ValidationError] = field(default_factory=list)
    reason: str | None = None


def import_map(raw: Any) -> ImportResult:
    """Admit an already-parsed JSON value as a map.

    Failures are returned, not raised: shape or schema mismatches carry a
    `reason`; a validation report containing errors rejects the map but is
    attached so the caller can show it.
    """
    reason = check_map_shape(raw)
    if reason is not None:
        LOGGER.warning("Import rejected: %s", reason)
        return ImportResult(ok=False, reason=reason)

    try:
        game_map = parse_map(raw)
    except SchemaError as exc:
        reason = _schema_reason(exc)
        LOGGER.warning("Import rejected: %s", reason)
        return ImportResult(ok=False, reason=reason)

    report = validate_map(game_map)
    if has_errors(report):
        n_errors = sum(1 for e in report if e.severity is Severity.ERROR)
        reason = f"map has {n_errors} validation error(s)"
        LOGGER.warning("Import rejected for %r: %s", game_map.id, reason)
        return ImportResult(ok=False, game_map=game_map, report=report, reason=reason)

    LOGGER.info("Imported map %r with %d finding(s)", game_map.id, len(report))
    return ImportResult(ok=True, game_map=game_map, report=report)


def import_map_json(text: str) -> ImportResult:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        reason = f"invalid JSON: {exc}"
        LOGGER.warning("Import rejected: %s", reason)
        return ImportResult(ok=False, reason=reason)
    return import_map(raw)


def import_map_file(path: Path) -> ImportResult:
    return import_map_json(Path(path).read_text(encoding="utf-8"))

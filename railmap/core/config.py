"""Editor configuration (defaults, paths, logging)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

# Persistence
STORAGE_KEY: str = "metroMapEditorData"
STORAGE_FILE: str = "railmap_storage.json"

# Grid snapping for new maps
DEFAULT_GRID_SIZE: int = 50

# Station sizing: <= small max is "small", <= medium max is "medium", otherwise "large"
SMALL_STATION_MAX_PLATFORMS: int = 2
MEDIUM_STATION_MAX_PLATFORMS: int = 7

# New-map metadata
DEFAULT_MAP_NAME: str = "Untitled Map"
DEFAULT_REGION: str = "Unknown"
DEFAULT_DESCRIPTION: str = "A new metro map created with the editor."
DEFAULT_MAP_VERSION: str = "1.0"
MAX_SEED: int = 100000


@dataclass(frozen=True)
class EditorConfig:
    grid_size: int = DEFAULT_GRID_SIZE
    grid_snap: bool = True
    default_map_name: str = DEFAULT_MAP_NAME
    default_region: str = DEFAULT_REGION
    storage_path: Path | None = None


def load_config(path: Path | None = None) -> EditorConfig:
    """Load an `EditorConfig` from a YAML file; missing file or `None` gives defaults."""
    if path is None:
        return EditorConfig()
    path = Path(path)
    if not path.exists():
        return EditorConfig()

    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at top level, got {type(raw).__name__}")

    known = {f.name for f in fields(EditorConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"{path}: unknown config keys: {unknown}")

    if raw.get("storage_path") is not None:
        raw["storage_path"] = Path(raw["storage_path"])
    if "grid_size" in raw:
        raw["grid_size"] = int(raw["grid_size"])
        if raw["grid_size"] <= 0:
            raise ValueError(f"{path}: grid_size must be positive, got {raw['grid_size']}")
    return EditorConfig(**raw)


@dataclass(frozen=True)
class Paths:
    root: Path
    data: Path
    storage_file: Path
    exports: Path


def get_paths(root: Path | None = None, config: EditorConfig | None = None) -> Paths:
    r = Path.cwd() if root is None else Path(root).resolve()
    data = r / "data"
    storage_file = data / STORAGE_FILE
    if config is not None and config.storage_path is not None:
        storage_file = Path(config.storage_path)
    return Paths(root=r, data=data, storage_file=storage_file, exports=r / "exports")


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

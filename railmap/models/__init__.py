"""Pydantic entity models and validation report types.

These are the contracts every other module works against:
- `GameMap` is the aggregate root; stations and tracks refer to each other by id only.
- `ValidationError` findings are data, returned rather than raised.
"""

from __future__ import annotations

from railmap.models.report import (
    Category,
    Severity,
    ValidationError,
    count_by_severity,
    has_errors,
)
from railmap.models.schemas import (
    AdminSettings,
    Coordinates,
    GameMap,
    GameSettings,
    GridSnap,
    LayerVisibility,
    MapBackground,
    MapMetadata,
    PowerType,
    RailNetwork,
    Station,
    StationType,
    Track,
    TrackCondition,
    TrackDirection,
    TrainSpeedType,
    create_default_map,
    merge_model,
)

__all__ = [
    "AdminSettings",
    "Category",
    "Coordinates",
    "GameMap",
    "GameSettings",
    "GridSnap",
    "LayerVisibility",
    "MapBackground",
    "MapMetadata",
    "PowerType",
    "RailNetwork",
    "Severity",
    "Station",
    "StationType",
    "Track",
    "TrackCondition",
    "TrackDirection",
    "TrainSpeedType",
    "ValidationError",
    "count_by_severity",
    "create_default_map",
    "has_errors",
    "merge_model",
]

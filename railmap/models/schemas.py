"""Entity definitions for rail-network maps.

This module contains only:
- enumerations used by stations and tracks
- pydantic models for `Station`, `Track` and the `GameMap` aggregate
- `create_default_map` (factory for a fresh, empty map)

Wire names are camelCase (`distanceKm`, `railNetwork`, ...); Python attributes
are snake_case. Models accept either spelling and keep unknown keys so a map
survives a load/save round-trip unchanged.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from railmap.core.config import (
    DEFAULT_DESCRIPTION,
    DEFAULT_MAP_VERSION,
    MAX_SEED,
    EditorConfig,
)


class StationType(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class TrainSpeedType(str, Enum):
    HIGH_SPEED = "HIGH_SPEED"
    EXPRESS = "EXPRESS"
    LOCAL = "LOCAL"


class TrackDirection(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    BOTH = "both"


class TrackCondition(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class PowerType(str, Enum):
    ELECTRIC = "electric"
    DIESEL = "diesel"
    HYBRID = "hybrid"


class MapModel(BaseModel):
    """Base for every map entity: camelCase aliases, unknown keys preserved."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        ser_json_inf_nan="constants",
    )


# Strict: JSON numbers only, so "0" or true never pass as a coordinate.
Coordinate = Annotated[float, Field(strict=True)]


class Coordinates(MapModel):
    x: Coordinate
    y: Coordinate


class Station(MapModel):
    id: str = Field(min_length=1)
    name: str = ""
    type: StationType = StationType.SMALL
    coordinates: Coordinates
    importance: int = Field(default=50, ge=0, le=100)
    platforms: int = Field(default=1, ge=1)
    services: list[TrainSpeedType] = Field(
        default_factory=lambda: [TrainSpeedType.LOCAL], min_length=1
    )

    @field_validator("services")
    @classmethod
    def _dedupe_services(cls, v: list[TrainSpeedType]) -> list[TrainSpeedType]:
        return list(dict.fromkeys(v))


class VisualStyle(MapModel):
    color: int | None = None
    width: float | None = None
    alpha: float | None = None
    dash_pattern: list[float] | None = None


class AdminTrackMetadata(MapModel):
    notes: str | None = None
    last_modified: str | None = None
    modified_by: str | None = None


class Track(MapModel):
    id: str = Field(min_length=1)
    source: str
    target: str
    distance_km: float = Field(ge=0)
    speed_type: TrainSpeedType
    bidirectional: bool = True
    direction: TrackDirection = TrackDirection.BOTH
    condition: TrackCondition = TrackCondition.GOOD
    power_type: PowerType = PowerType.ELECTRIC
    scenic_value: int = Field(default=50, ge=0, le=100)
    # Length 0 or >= 2 is well-formed; a single point is reported by the validator.
    points: list[Coordinates] | None = None
    electrified: bool | None = None
    visual_style: VisualStyle | None = None
    admin_metadata: AdminTrackMetadata | None = None


class RailNetwork(MapModel):
    stations: list[Station] = Field(default_factory=list)
    tracks: list[Track] = Field(default_factory=list)


class BackgroundMetadata(MapModel):
    filename: str | None = None
    file_size: int | None = None
    uploaded: str | None = None


class MapBackground(MapModel):
    image_url: str
    width: float
    height: float
    scale: float | None = None
    offset: Coordinates | None = None
    metadata: BackgroundMetadata | None = None


class MapMetadata(MapModel):
    name: str
    region: str
    description: str
    created: str
    version: str
    seed: int
    author: str | None = None
    tags: list[str] | None = None


class Bounds(MapModel):
    x: float
    y: float
    width: float
    height: float


class CameraConstraints(MapModel):
    min_zoom: float | None = None
    max_zoom: float | None = None
    bounds: Bounds | None = None


class Theme(MapModel):
    background_color: int | None = None
    track_styles: dict[str, Any] | None = None
    station_styles: dict[str, Any] | None = None


class GameSettings(MapModel):
    initial_zoom: float | None = None
    center_position: Coordinates | None = None
    camera_constraints: CameraConstraints | None = None
    theme: Theme | None = None


class GridSnap(MapModel):
    enabled: bool
    size: int


class LayerVisibility(MapModel):
    background: bool = True
    stations: bool = True
    tracks: bool = True
    grid: bool = True


class EditHistoryEntry(MapModel):
    id: str
    timestamp: str
    operation: str  # create / update / delete / move
    object_type: str  # station / track / background / map
    object_id: str | None = None
    description: str
    before_state: Any = None
    after_state: Any = None


class AdminSettings(MapModel):
    grid_snap: GridSnap | None = None
    layers: LayerVisibility | None = None
    edit_history: list[EditHistoryEntry] | None = None


class GameMap(MapModel):
    id: str
    metadata: MapMetadata
    background: MapBackground | None = None
    rail_network: RailNetwork = Field(default_factory=RailNetwork)
    game_settings: GameSettings | None = None
    admin_settings: AdminSettings | None = None


M = TypeVar("M", bound=MapModel)


def field_name(model_cls: type[MapModel], key: str) -> str:
    """Resolve a wire (camelCase) or attribute (snake_case) key to the attribute name."""
    if key in model_cls.model_fields:
        return key
    for name, info in model_cls.model_fields.items():
        if info.alias == key:
            return name
    return key


def merge_model(model: M, updates: Mapping[str, Any]) -> M:
    """Shallow-merge `updates` into `model` and re-validate.

    Raises pydantic's `ValidationError` when the merged result violates the schema.
    """
    data = model.model_dump()
    for key, value in updates.items():
        if isinstance(value, BaseModel):
            value = value.model_dump()
        data[field_name(type(model), key)] = value
    return type(model).model_validate(data)


def create_default_map(
    config: EditorConfig | None = None,
    *,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> GameMap:
    """Return a fresh, empty map with default metadata and admin settings."""
    cfg = EditorConfig() if config is None else config
    created = datetime.now(timezone.utc) if now is None else now
    seed = (rng or random).randrange(MAX_SEED)
    stamp_ms = int(created.timestamp() * 1000)

    return GameMap(
        id=f"new-map-{stamp_ms}",
        metadata=MapMetadata(
            name=cfg.default_map_name,
            region=cfg.default_region,
            description=DEFAULT_DESCRIPTION,
            created=created.isoformat().replace("+00:00", "Z"),
            version=DEFAULT_MAP_VERSION,
            seed=seed,
        ),
        rail_network=RailNetwork(),
        game_settings=GameSettings(initial_zoom=1, center_position=Coordinates(x=0, y=0)),
        admin_settings=AdminSettings(
            grid_snap=GridSnap(enabled=cfg.grid_snap, size=cfg.grid_size),
            layers=LayerVisibility(),
        ),
    )

"""Owner of the current `GameMap` and the only place it is mutated.

Editing is permissive: operations never reject a change because it would make
the map invalid (use `railmap.validation.validate_map` for that). They only
refuse id collisions and values the entity schema cannot represent, logging a
warning and leaving the map untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as SchemaError

from railmap.core.config import EditorConfig
from railmap.graph.geometry import same_position, straight_line
from railmap.models.schemas import (
    AdminSettings,
    Coordinates,
    GameMap,
    GameSettings,
    MapBackground,
    MapModel,
    Station,
    Track,
    create_default_map,
    merge_model,
)

if TYPE_CHECKING:
    from railmap.io.storage import LocalStore

LOGGER = logging.getLogger(__name__)


class MapNotLoadedError(RuntimeError):
    """An operation was invoked before `load_map` / `create_new_map`."""


class MapEventKind(str, Enum):
    REPLACED = "replaced"
    STATION_DELETED = "station_deleted"
    TRACK_DELETED = "track_deleted"
    CHANGED = "changed"


@dataclass(frozen=True)
class MapEvent:
    kind: MapEventKind
    object_id: str | None = None


Listener = Callable[[MapEvent], None]


def _without_id(updates: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in updates.items() if k != "id"}


class MapStore:
    def __init__(self, game_map: GameMap | None = None, config: EditorConfig | None = None) -> None:
        self.config = EditorConfig() if config is None else config
        self._map = game_map
        self._listeners: list[Listener] = []

    # --- state & signalling ---

    @property
    def game_map(self) -> GameMap | None:
        return self._map

    @property
    def is_loaded(self) -> bool:
        return self._map is not None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener` for map events; returns a function that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, kind: MapEventKind, object_id: str | None = None) -> None:
        event = MapEvent(kind=kind, object_id=object_id)
        for listener in list(self._listeners):
            listener(event)

    def _require_map(self) -> GameMap:
        if self._map is None:
            raise MapNotLoadedError("No map loaded; call load_map() or create_new_map() first.")
        return self._map

    # --- whole-map operations ---

    def load_map(self, game_map: GameMap) -> None:
        self._map = game_map
        LOGGER.info(
            "Loaded map %r (%d stations, %d tracks)",
            game_map.id,
            len(game_map.rail_network.stations),
            len(game_map.rail_network.tracks),
        )
        self._emit(MapEventKind.REPLACED)

    def create_new_map(self) -> GameMap:
        self._map = create_default_map(self.config)
        LOGGER.info("Created new map %r", self._map.id)
        self._emit(MapEventKind.REPLACED)
        return self._map

    def initialize(self, storage: LocalStore) -> GameMap:
        """Load the saved map from `storage`, or start a new one if there is none."""
        saved = storage.load_map()
        if saved is None:
            return self.create_new_map()
        self.load_map(saved)
        return saved

    def persist(self, storage: LocalStore) -> None:
        storage.save_map(self._require_map())

    # --- lookups ---

    def get_station_by_id(self, station_id: str) -> Station | None:
        for s in self._require_map().rail_network.stations:
            if s.id == station_id:
                return s
        return None

    def get_track_by_id(self, track_id: str) -> Track | None:
        for t in self._require_map().rail_network.tracks:
            if t.id == track_id:
                return t
        return None

    def incident_tracks(self, station_id: str) -> list[Track]:
        return [
            t
            for t in self._require_map().rail_network.tracks
            if t.source == station_id or t.target == station_id
        ]

    # --- stations ---

    def add_station(self, station: Station) -> bool:
        """Append `station`; returns False (no-op) when its id is already taken."""
        network = self._require_map().rail_network
        if any(s.id == station.id for s in network.stations):
            LOGGER.warning('Station with ID "%s" already exists.', station.id)
            return False
        network.stations.append(station.model_copy(deep=True))
        self._emit(MapEventKind.CHANGED, station.id)
        return True

    def update_station(self, station_id: str, updates: Mapping[str, Any]) -> bool:
        """Merge `updates` into the station.

        Moving a station re-anchors the matching end point of every incident
        track that carries explicit points.
        """
        network = self._require_map().rail_network
        for idx, current in enumerate(network.stations):
            if current.id == station_id:
                break
        else:
            return False

        try:
            updated = merge_model(current, _without_id(updates))
        except SchemaError as exc:
            LOGGER.warning("Rejected update for station %r: %s", station_id, exc.errors()[:3])
            return False

        network.stations[idx] = updated
        if not same_position(current.coordinates, updated.coordinates):
            self._reanchor_tracks(station_id, updated.coordinates)
        self._emit(MapEventKind.CHANGED, station_id)
        return True

    def _reanchor_tracks(self, station_id: str, coordinates: Coordinates) -> None:
        network = self._require_map().rail_network
        for idx, t in enumerate(network.tracks):
            if not t.points or station_id not in (t.source, t.target):
                continue
            points = list(t.points)
            if t.source == station_id:
                points[0] = coordinates.model_copy()
            if t.target == station_id:
                points[-1] = coordinates.model_copy()
            network.tracks[idx] = t.model_copy(update={"points": points})
            LOGGER.debug("Re-anchored track %r to moved station %r", t.id, station_id)

    def delete_station(self, station_id: str) -> None:
        """Remove the station and every track that starts or ends at it."""
        network = self._require_map().rail_network
        network.stations = [s for s in network.stations if s.id != station_id]
        removed = [t.id for t in network.tracks if station_id in (t.source, t.target)]
        network.tracks = [
            t for t in network.tracks if t.source != station_id and t.target != station_id
        ]
        if removed:
            LOGGER.debug("Deleting station %r removed %d incident tracks", station_id, len(removed))
        self._emit(MapEventKind.STATION_DELETED, station_id)
        for track_id in removed:
            self._emit(MapEventKind.TRACK_DELETED, track_id)

    # --- tracks ---

    def add_track(self, track: Track) -> bool:
        """Append `track`; returns False (no-op) when its id is already taken.

        A track without points gets a straight two-point line between its
        stations when both exist.
        """
        network = self._require_map().rail_network
        if any(t.id == track.id for t in network.tracks):
            LOGGER.warning('Track with ID "%s" already exists.', track.id)
            return False

        if not track.points:
            source = self.get_station_by_id(track.source)
            target = self.get_station_by_id(track.target)
            if source is not None and target is not None:
                track = track.model_copy(update={"points": straight_line(source, target)})

        network.tracks.append(track.model_copy(deep=True))
        self._emit(MapEventKind.CHANGED, track.id)
        return True

    def update_track(self, track_id: str, updates: Mapping[str, Any]) -> bool:
        network = self._require_map().rail_network
        for idx, current in enumerate(network.tracks):
            if current.id == track_id:
                try:
                    network.tracks[idx] = merge_model(current, _without_id(updates))
                except SchemaError as exc:
                    LOGGER.warning("Rejected update for track %r: %s", track_id, exc.errors()[:3])
                    return False
                self._emit(MapEventKind.CHANGED, track_id)
                return True
        return False

    def delete_track(self, track_id: str) -> None:
        network = self._require_map().rail_network
        network.tracks = [t for t in network.tracks if t.id != track_id]
        self._emit(MapEventKind.TRACK_DELETED, track_id)

    # --- metadata & settings ---

    def _merge_section(self, label: str, current: MapModel, updates: Mapping[str, Any]) -> Any:
        try:
            return merge_model(current, updates)
        except SchemaError as exc:
            LOGGER.warning("Rejected %s update: %s", label, exc.errors()[:3])
            return None

    def update_map_metadata(self, updates: Mapping[str, Any]) -> bool:
        game_map = self._require_map()
        merged = self._merge_section("metadata", game_map.metadata, updates)
        if merged is None:
            return False
        game_map.metadata = merged
        self._emit(MapEventKind.CHANGED)
        return True

    def update_game_settings(self, updates: Mapping[str, Any]) -> bool:
        game_map = self._require_map()
        current = game_map.game_settings or GameSettings()
        merged = self._merge_section("game settings", current, updates)
        if merged is None:
            return False
        game_map.game_settings = merged
        self._emit(MapEventKind.CHANGED)
        return True

    def update_admin_settings(self, updates: Mapping[str, Any]) -> bool:
        game_map = self._require_map()
        current = game_map.admin_settings or AdminSettings()
        merged = self._merge_section("admin settings", current, updates)
        if merged is None:
            return False
        game_map.admin_settings = merged
        self._emit(MapEventKind.CHANGED)
        return True

    def update_background(self, background: MapBackground | Mapping[str, Any] | None) -> bool:
        """Replace the background wholesale; `None` removes it."""
        game_map = self._require_map()
        if background is not None and not isinstance(background, MapBackground):
            try:
                background = MapBackground.model_validate(background)
            except SchemaError as exc:
                LOGGER.warning("Rejected background: %s", exc.errors()[:3])
                return False
        game_map.background = background
        self._emit(MapEventKind.CHANGED)
        return True

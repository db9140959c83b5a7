"""Station attributes derivable from incident tracks.

Pure computations only. Whether (and when) a derived value is written back
onto a station is up to the caller; manual edits always win.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from railmap.core.config import MEDIUM_STATION_MAX_PLATFORMS, SMALL_STATION_MAX_PLATFORMS
from railmap.models.report import Category, Severity, ValidationError
from railmap.models.schemas import GameMap, StationType, Track, TrainSpeedType


def _incident(tracks: Iterable[Track], station_id: str) -> list[Track]:
    return [t for t in tracks if t.source == station_id or t.target == station_id]


def auto_detected_services(tracks: Iterable[Track], station_id: str) -> list[TrainSpeedType]:
    """Distinct `speed_type` values of tracks touching the station (first-seen order)."""
    return list(dict.fromkeys(t.speed_type for t in _incident(tracks, station_id)))


def required_platform_count(tracks: Iterable[Track], station_id: str) -> int:
    """Two platforms per bidirectional incident track, one per one-way track; at least 1."""
    total = sum(2 if t.bidirectional else 1 for t in _incident(tracks, station_id))
    return max(total, 1)


def required_station_type(platforms: int) -> StationType:
    if platforms <= SMALL_STATION_MAX_PLATFORMS:
        return StationType.SMALL
    if platforms <= MEDIUM_STATION_MAX_PLATFORMS:
        return StationType.MEDIUM
    return StationType.LARGE


def derived_station_update(tracks: Iterable[Track], station_id: str) -> dict[str, Any]:
    """Partial update for `MapStore.update_station` carrying the derived values.

    `services` is left out for a station without tracks so it keeps its
    (non-empty) authored list.
    """
    tracks = list(tracks)
    platforms = required_platform_count(tracks, station_id)
    update: dict[str, Any] = {
        "platforms": platforms,
        "type": required_station_type(platforms),
    }
    services = auto_detected_services(tracks, station_id)
    if services:
        update["services"] = services
    return update


def audit_derived_attributes(game_map: GameMap) -> list[ValidationError]:
    """Info-level findings for stations whose authored values differ from derived ones."""
    tracks = list(game_map.rail_network.tracks)
    out: list[ValidationError] = []
    for station in game_map.rail_network.stations:
        expected = derived_station_update(tracks, station.id)
        if station.platforms != expected["platforms"]:
            out.append(
                ValidationError(
                    severity=Severity.INFO,
                    message=(
                        f'Station "{station.id}" has {station.platforms} platforms; '
                        f"its tracks suggest {expected['platforms']}."
                    ),
                    category=Category.STATION,
                    related_id=station.id,
                )
            )
        if station.type != expected["type"]:
            out.append(
                ValidationError(
                    severity=Severity.INFO,
                    message=(
                        f'Station "{station.id}" is {station.type.value}; '
                        f"its tracks suggest {expected['type'].value}."
                    ),
                    category=Category.STATION,
                    related_id=station.id,
                )
            )
        services = expected.get("services")
        if services is not None and set(station.services) != set(services):
            out.append(
                ValidationError(
                    severity=Severity.INFO,
                    message=(
                        f'Station "{station.id}" services '
                        f"{sorted(s.value for s in station.services)} differ from its tracks "
                        f"{sorted(s.value for s in services)}."
                    ),
                    category=Category.STATION,
                    related_id=station.id,
                )
            )
    return out

"""Structural and soft-consistency checks for a `GameMap`.

`validate_map` accumulates every finding instead of stopping at the first one.
Report order is stable: station checks (station order), then track checks
(track order), then a single aggregate network check.
"""

from __future__ import annotations

import logging

from railmap.graph.components import find_connected_components
from railmap.graph.geometry import endpoint_matches, invalid_point_indices
from railmap.models.report import Category, Severity, ValidationError
from railmap.models.schemas import GameMap, Station, Track

LOGGER = logging.getLogger(__name__)


def _station_checks(stations: list[Station]) -> list[ValidationError]:
    out: list[ValidationError] = []
    seen: set[str] = set()
    for station in stations:
        if station.id in seen:
            out.append(
                ValidationError(
                    severity=Severity.ERROR,
                    message=f'Duplicate station ID: "{station.id}"',
                    category=Category.STATION,
                    related_id=station.id,
                )
            )
        seen.add(station.id)

        if not station.name:
            out.append(
                ValidationError(
                    severity=Severity.WARNING,
                    message="Station is missing a name.",
                    category=Category.STATION,
                    related_id=station.id,
                )
            )
    return out


def _track_error(track: Track, message: str, severity: Severity = Severity.ERROR) -> ValidationError:
    return ValidationError(
        severity=severity,
        message=message,
        category=Category.TRACK,
        related_id=track.id,
    )


def _track_checks(tracks: list[Track], stations: list[Station]) -> list[ValidationError]:
    out: list[ValidationError] = []
    # Last occurrence wins when station ids are duplicated.
    station_by_id = {s.id: s for s in stations}

    seen: set[str] = set()
    for track in tracks:
        tid = track.id
        if tid in seen:
            out.append(_track_error(track, f'Duplicate track ID: "{tid}"'))
        seen.add(tid)

        source = station_by_id.get(track.source)
        target = station_by_id.get(track.target)
        if source is None:
            out.append(
                _track_error(
                    track, f'Track "{tid}" references non-existent source station "{track.source}"'
                )
            )
        if target is None:
            out.append(
                _track_error(
                    track, f'Track "{tid}" references non-existent target station "{track.target}"'
                )
            )
        if track.source == track.target:
            out.append(_track_error(track, f'Track "{tid}" connects a station to itself.'))

        if not track.points:
            continue

        if len(track.points) < 2:
            out.append(_track_error(track, f'Track "{tid}" has points array with fewer than 2 points.'))

        if source is not None and target is not None:
            first_ok, last_ok = endpoint_matches(track, source, target)
            if not first_ok:
                out.append(
                    _track_error(
                        track,
                        f'Track "{tid}" first point does not match source station coordinates.',
                        Severity.WARNING,
                    )
                )
            if not last_ok:
                out.append(
                    _track_error(
                        track,
                        f'Track "{tid}" last point does not match target station coordinates.',
                        Severity.WARNING,
                    )
                )

        for idx in invalid_point_indices(track.points):
            out.append(
                _track_error(
                    track, f'Track "{tid}" has invalid point at index {idx} (non-finite coordinate).'
                )
            )
    return out


def _network_checks(stations: list[Station], tracks: list[Track]) -> list[ValidationError]:
    # An empty map is not "disjointed".
    if not stations:
        return []
    components = find_connected_components(stations, tracks)
    if len(components) <= 1:
        return []
    return [
        ValidationError(
            severity=Severity.WARNING,
            message=(
                "The rail network is disjointed, consisting of "
                f"{len(components)} separate sub-networks."
            ),
            category=Category.NETWORK,
        )
    ]


def validate_map(game_map: GameMap) -> list[ValidationError]:
    """Return every finding for `game_map` in a stable order. Never mutates the map."""
    stations = list(game_map.rail_network.stations)
    tracks = list(game_map.rail_network.tracks)

    report = [
        *_station_checks(stations),
        *_track_checks(tracks, stations),
        *_network_checks(stations, tracks),
    ]
    LOGGER.debug(
        "Validated map %r: %d stations, %d tracks, %d findings",
        game_map.id,
        len(stations),
        len(tracks),
        len(report),
    )
    return report

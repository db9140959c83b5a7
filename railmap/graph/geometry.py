"""Point/coordinate consistency checks for track geometry."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from railmap.models.schemas import Coordinates, Station, Track


def same_position(a: Coordinates, b: Coordinates) -> bool:
    return a.x == b.x and a.y == b.y


def invalid_point_indices(points: Sequence[Coordinates] | None) -> list[int]:
    """Indices of points whose x or y is not a finite number."""
    if not points:
        return []
    xy = np.array([[p.x, p.y] for p in points], dtype=float)
    return [int(i) for i in np.flatnonzero(~np.isfinite(xy).all(axis=1))]


def endpoint_matches(track: Track, source: Station, target: Station) -> tuple[bool, bool]:
    """(first point == source coordinates, last point == target coordinates).

    A track without points trivially matches at both ends.
    """
    if not track.points:
        return True, True
    return (
        same_position(track.points[0], source.coordinates),
        same_position(track.points[-1], target.coordinates),
    )


def straight_line(source: Station, target: Station) -> list[Coordinates]:
    """Default two-point geometry between two stations (copies, not shared objects)."""
    return [source.coordinates.model_copy(), target.coordinates.model_copy()]

"""Bundled sample maps, kept as serialized (wire-format) data."""

from __future__ import annotations

import copy
from typing import Any

from railmap.models.schemas import GameMap

SOUTH_KOREA_MAP: dict[str, Any] = {
    "id": "south-korea",
    "metadata": {
        "name": "South Korean Rail Network",
        "region": "South Korea",
        "description": (
            "Rail network of South Korea featuring KTX high-speed lines, express "
            "regional services, and local branch lines."
        ),
        "created": "2024-01-01T00:00:00.000Z",
        "version": "2.0",
        "seed": 12345,
        "author": "Transit Tag Development Team",
    },
    "railNetwork": {
        "stations": [
            {
                "id": "yongsan",
                "name": "YONGSAN",
                "type": "large",
                "coordinates": {"x": -100, "y": -50},
                "importance": 100,
                "platforms": 8,
                "services": ["HIGH_SPEED", "EXPRESS", "LOCAL"],
            },
            {
                "id": "osong",
                "name": "OSONG",
                "type": "medium",
                "coordinates": {"x": 150, "y": 120},
                "importance": 70,
                "platforms": 4,
                "services": ["HIGH_SPEED", "EXPRESS"],
            },
            {
                "id": "busan",
                "name": "BUSAN",
                "type": "large",
                "coordinates": {"x": 600, "y": 450},
                "importance": 95,
                "platforms": 6,
                "services": ["HIGH_SPEED", "EXPRESS", "LOCAL"],
            },
        ],
        "tracks": [
            {
                "id": "yongsan-osong",
                "source": "yongsan",
                "target": "osong",
                "distanceKm": 120,
                "speedType": "HIGH_SPEED",
                "bidirectional": True,
                "direction": "both",
                "condition": "excellent",
                "powerType": "electric",
                "scenicValue": 60,
            },
            {
                "id": "osong-busan",
                "source": "osong",
                "target": "busan",
                "distanceKm": 280,
                "speedType": "HIGH_SPEED",
                "bidirectional": True,
                "direction": "both",
                "condition": "excellent",
                "powerType": "electric",
                "scenicValue": 55,
            },
        ],
    },
    "gameSettings": {
        "initialZoom": 1.0,
        "centerPosition": {"x": 200, "y": 200},
        "cameraConstraints": {
            "minZoom": 0.3,
            "maxZoom": 2.5,
            "bounds": {"x": -400, "y": -300, "width": 1200, "height": 1000},
        },
    },
}

MAP_COLLECTION: dict[str, dict[str, Any]] = {
    "south-korea": SOUTH_KOREA_MAP,
}

DEFAULT_MAP_ID: str = "south-korea"


def get_bundled_map(map_id: str = DEFAULT_MAP_ID) -> GameMap:
    """Return a fresh `GameMap` for a bundled map id."""
    if map_id not in MAP_COLLECTION:
        raise ValueError(f"Unknown bundled map {map_id!r}; available: {sorted(MAP_COLLECTION)}")
    return GameMap.model_validate(copy.deepcopy(MAP_COLLECTION[map_id]))

"""Mutation engine for the current map plus caller-side selection tracking."""

from __future__ import annotations

from railmap.store.map_store import (
    MapEvent,
    MapEventKind,
    MapNotLoadedError,
    MapStore,
)
from railmap.store.selection import Selection

__all__ = ["MapEvent", "MapEventKind", "MapNotLoadedError", "MapStore", "Selection"]

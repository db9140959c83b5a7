from __future__ import annotations

from railmap.store.map_store import MapEvent, MapEventKind, MapStore


def _toggle(selected: list[str], object_id: str, multi: bool) -> list[str]:
    if multi:
        if object_id in selected:
            return [i for i in selected if i != object_id]
        return [*selected, object_id]
    # Clicking the only selected object again deselects it.
    if selected == [object_id]:
        return []
    return [object_id]


class Selection:
    """Caller-owned selection state kept consistent with a `MapStore`.

    Cleared when the map is replaced; deleted stations/tracks are dropped.
    """

    def __init__(self, store: MapStore) -> None:
        self.station_ids: list[str] = []
        self.track_ids: list[str] = []
        self._unsubscribe = store.subscribe(self._on_event)

    def _on_event(self, event: MapEvent) -> None:
        if event.kind is MapEventKind.REPLACED:
            self.clear()
        elif event.kind is MapEventKind.STATION_DELETED:
            self.station_ids = [i for i in self.station_ids if i != event.object_id]
        elif event.kind is MapEventKind.TRACK_DELETED:
            self.track_ids = [i for i in self.track_ids if i != event.object_id]

    def select_station(self, station_id: str, multi: bool = False) -> None:
        self.station_ids = _toggle(self.station_ids, station_id, multi)

    def select_track(self, track_id: str, multi: bool = False) -> None:
        self.track_ids = _toggle(self.track_ids, track_id, multi)

    def clear(self) -> None:
        self.station_ids = []
        self.track_ids = []

    def detach(self) -> None:
        """Stop following the store."""
        self._unsubscribe()

"""String-keyed local store persisted as a single JSON file.

The saved map is the unit of persistence. Anything that cannot be read back
as a map (parse error, wrong shape, schema mismatch) counts as "no saved
state" rather than a failure.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError as SchemaError

from railmap.core.config import STORAGE_KEY
from railmap.io import check_map_shape, ensure_parent_dir, map_to_json, parse_map
from railmap.models.schemas import GameMap

LOGGER = logging.getLogger(__name__)


class LocalStore:
    def __init__(self, path: Path, *, key: str = STORAGE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists() or self.path.stat().st_size == 0:
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            LOGGER.error("Storage file %s is not valid JSON: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            LOGGER.error("Storage file %s does not hold an object; ignoring it", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: dict[str, str]) -> None:
        ensure_parent_dir(self.path)
        self.path.write_text(json.dumps(items, ensure_ascii=False), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if items.pop(key, None) is not None:
            self._write_all(items)

    def save_map(self, game_map: GameMap) -> bool:
        try:
            self.set_item(self.key, map_to_json(game_map, indent=None))
        except OSError as exc:
            LOGGER.error("Error saving map %r to %s: %s", game_map.id, self.path, exc)
            return False
        return True

    def load_map(self) -> GameMap | None:
        """Return the saved map, or None when nothing usable is stored."""
        serialized = self.get_item(self.key)
        if not serialized:
            return None

        try:
            data = json.loads(serialized)
        except json.JSONDecodeError as exc:
            LOGGER.error("Error loading saved map: %s; discarding it", exc)
            self.remove_item(self.key)
            return None

        reason = check_map_shape(data)
        if reason is not None:
            LOGGER.warning("Saved data is not a map (%s); ignoring it", reason)
            return None

        try:
            return parse_map(data)
        except SchemaError as exc:
            LOGGER.error("Saved map failed schema checks (%d errors); discarding it", exc.error_count())
            self.remove_item(self.key)
            return None

    def clear(self) -> None:
        self.remove_item(self.key)

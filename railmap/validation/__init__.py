"""Map validation (findings are returned as data, never raised)."""

from __future__ import annotations

from railmap.models.report import has_errors
from railmap.validation.validator import validate_map

__all__ = ["has_errors", "validate_map"]

"""Validation findings (transient; recomputed from the current map, never persisted)."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Category(str, Enum):
    STATION = "station"
    TRACK = "track"
    NETWORK = "network"
    METADATA = "metadata"


class ValidationError(BaseModel):
    """A single finding in a validation report."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str
    category: Category
    related_id: str | None = None

    def __str__(self) -> str:
        where = f" [{self.related_id}]" if self.related_id else ""
        return f"{self.severity.value.upper()} {self.category.value}{where}: {self.message}"


def has_errors(report: Iterable[ValidationError]) -> bool:
    """True when any finding is error-severity (the import/export gate)."""
    return any(e.severity is Severity.ERROR for e in report)


def count_by_severity(report: Iterable[ValidationError]) -> dict[str, int]:
    counts = {s.value: 0 for s in Severity}
    for e in report:
        counts[e.severity.value] += 1
    return counts

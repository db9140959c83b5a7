"""Derived station attributes (services, platforms, type) computed from incident tracks."""

from __future__ import annotations

from railmap.derived.attributes import (
    audit_derived_attributes,
    auto_detected_services,
    derived_station_update,
    required_platform_count,
    required_station_type,
)

__all__ = [
    "audit_derived_attributes",
    "auto_detected_services",
    "derived_station_update",
    "required_platform_count",
    "required_station_type",
]

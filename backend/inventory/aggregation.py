"""
Fleet inventory aggregation.

Three rollups feed an ``InventorySummary``:

* a raw per-status grouping (exact status text -> count),
* per battery type, carrying the type's descriptive fields,
* per rated capacity.

The grand total is always the sum of the raw per-status grouping.  The named
buckets read fixed status literals out of that grouping, so any status
outside ``SUMMARY_BUCKETS`` is counted in the total and in no bucket.

The per-type and per-capacity sub-counts compare against the capitalised
literals ``"Full"``, ``"Charging"`` and ``"Maintenance"``, which are not the
values the transition engine writes.  They are reproduced as-is; with the
lowercase statuses in use they count zero.
"""

from __future__ import annotations

import uuid
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .status import CHARGING_LITERAL, FULL_LITERAL, MAINTENANCE_LITERAL, SUMMARY_BUCKETS


@dataclass
class TypeStats:
    battery_type_id: uuid.UUID
    type_code: str
    type_name: str
    manufacturer: str
    capacity_kwh: float
    total_count: int = 0
    full_count: int = 0
    charging_count: int = 0
    maintenance_count: int = 0


@dataclass
class CapacityStats:
    capacity_kwh: float
    total_count: int = 0
    full_count: int = 0
    charging_count: int = 0
    maintenance_count: int = 0


@dataclass
class InventorySummary:
    total_batteries: int = 0
    full_batteries: int = 0
    charging_batteries: int = 0
    maintenance_batteries: int = 0
    in_use_batteries: int = 0
    available_batteries: int = 0
    damaged_batteries: int = 0
    retired_batteries: int = 0
    battery_type_inventories: list[TypeStats] = field(default_factory=list)
    capacity_inventories: list[CapacityStats] = field(default_factory=list)


def _tally(stats: TypeStats | CapacityStats, status: str) -> None:
    stats.total_count += 1
    if status == FULL_LITERAL:
        stats.full_count += 1
    elif status == CHARGING_LITERAL:
        stats.charging_count += 1
    elif status == MAINTENANCE_LITERAL:
        stats.maintenance_count += 1


def count_by_status(universe: Iterable[Any]) -> dict[str, int]:
    """Group batteries by exact status text."""
    return dict(Counter(battery.status for battery in universe))


def stats_by_type(universe: Iterable[Any]) -> list[TypeStats]:
    """Per-type counts ordered by capacity, then type name.

    Batteries without a type are skipped.
    """
    groups: dict[uuid.UUID, TypeStats] = {}
    for battery in universe:
        battery_type = battery.battery_type
        if battery_type is None:
            continue
        stats = groups.get(battery_type.id)
        if stats is None:
            stats = TypeStats(
                battery_type_id=battery_type.id,
                type_code=battery_type.type_code,
                type_name=battery_type.type_name,
                manufacturer=battery_type.manufacturer,
                capacity_kwh=battery_type.capacity_kwh,
            )
            groups[battery_type.id] = stats
        _tally(stats, battery.status)

    return sorted(groups.values(), key=lambda s: (s.capacity_kwh, s.type_name or ""))


def stats_by_capacity(universe: Iterable[Any]) -> list[CapacityStats]:
    """Per-capacity counts ordered by capacity.  Untyped batteries are skipped."""
    groups: dict[float, CapacityStats] = {}
    for battery in universe:
        battery_type = battery.battery_type
        if battery_type is None:
            continue
        capacity = battery_type.capacity_kwh
        stats = groups.setdefault(capacity, CapacityStats(capacity_kwh=capacity))
        _tally(stats, battery.status)

    return sorted(groups.values(), key=lambda s: s.capacity_kwh)


def build_summary(
    status_counts: Mapping[str, int],
    type_stats: list[TypeStats],
    capacity_stats: list[CapacityStats],
) -> InventorySummary:
    """Assemble an ``InventorySummary`` from the three rollups."""
    buckets = {name: status_counts.get(literal, 0) for name, literal in SUMMARY_BUCKETS.items()}
    return InventorySummary(
        total_batteries=sum(status_counts.values()),
        battery_type_inventories=list(type_stats),
        capacity_inventories=list(capacity_stats),
        **buckets,
    )


def summarize(universe: Iterable[Any], station_id: uuid.UUID | None = None) -> InventorySummary:
    """Compute a summary over ``universe``, optionally restricted to one station."""
    batteries = list(universe)
    if station_id is not None:
        batteries = [b for b in batteries if b.station_id == station_id]
    return build_summary(
        count_by_status(batteries),
        stats_by_type(batteries),
        stats_by_capacity(batteries),
    )

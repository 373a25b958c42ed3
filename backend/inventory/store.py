"""
Battery store contract and an in-memory implementation.

The store holds no policy.  Filtering, ordering, transitions and rollups are
delegated to the functions in this package; the SQL store in
``app.repositories.battery_repository`` expresses the same rules in SQL.
"""

from __future__ import annotations

import copy
import uuid
from typing import Protocol, runtime_checkable

from .aggregation import CapacityStats, TypeStats, count_by_status, stats_by_capacity, stats_by_type
from .entities import Battery
from .filters import FilterCriteria, compile_filter, order_batteries
from .transitions import apply_charge_update, set_status


@runtime_checkable
class BatteryStore(Protocol):
    async def find_batteries(self, criteria: FilterCriteria | None = None) -> list: ...

    async def find_battery_by_id(self, battery_id: uuid.UUID): ...

    async def count_by_status(self, station_id: uuid.UUID | None = None) -> dict[str, int]: ...

    async def stats_by_type(self, station_id: uuid.UUID | None = None) -> list[TypeStats]: ...

    async def stats_by_capacity(
        self, station_id: uuid.UUID | None = None
    ) -> list[CapacityStats]: ...

    async def write_status(self, battery_id: uuid.UUID, status: str) -> bool: ...

    async def write_charge_level(self, battery_id: uuid.UUID, charge_level: int) -> bool: ...


class InMemoryBatteryStore:
    """Dictionary-backed ``BatteryStore``.

    Reads return copies so callers cannot change stored state without going
    through ``write_status`` / ``write_charge_level``.  Writes are
    read-modify-write with no version check: the last write wins.
    """

    def __init__(self, batteries: list[Battery] | None = None) -> None:
        self._batteries: dict[uuid.UUID, Battery] = {}
        for battery in batteries or []:
            self.add_battery(battery)

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def add_battery(self, battery: Battery) -> Battery:
        self._batteries[battery.id] = battery
        return battery

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _scoped(self, station_id: uuid.UUID | None) -> list[Battery]:
        batteries = list(self._batteries.values())
        if station_id is not None:
            batteries = [b for b in batteries if b.station_id == station_id]
        return batteries

    async def find_batteries(self, criteria: FilterCriteria | None = None) -> list[Battery]:
        matches = list(self._batteries.values())
        if criteria is not None and not criteria.is_empty():
            predicate = compile_filter(criteria)
            matches = [b for b in matches if predicate(b)]
        return [copy.copy(b) for b in order_batteries(matches)]

    async def find_battery_by_id(self, battery_id: uuid.UUID) -> Battery | None:
        battery = self._batteries.get(battery_id)
        return copy.copy(battery) if battery is not None else None

    async def count_by_status(self, station_id: uuid.UUID | None = None) -> dict[str, int]:
        return count_by_status(self._scoped(station_id))

    async def stats_by_type(self, station_id: uuid.UUID | None = None) -> list[TypeStats]:
        return stats_by_type(self._scoped(station_id))

    async def stats_by_capacity(
        self, station_id: uuid.UUID | None = None
    ) -> list[CapacityStats]:
        return stats_by_capacity(self._scoped(station_id))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def write_status(self, battery_id: uuid.UUID, status: str) -> bool:
        battery = self._batteries.get(battery_id)
        if battery is None:
            return False
        updated = set_status(copy.copy(battery), status)
        self._batteries[battery_id] = updated
        return True

    async def write_charge_level(self, battery_id: uuid.UUID, charge_level: int) -> bool:
        battery = self._batteries.get(battery_id)
        if battery is None:
            return False
        updated, accepted = apply_charge_update(copy.copy(battery), charge_level)
        if not accepted:
            return False
        self._batteries[battery_id] = updated
        return True

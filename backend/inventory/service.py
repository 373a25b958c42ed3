"""Inventory façade: listing, detail, summary and status/charge updates."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .aggregation import InventorySummary, build_summary
from .filters import FilterCriteria
from .status import BatteryStatus, parse_status
from .store import BatteryStore
from .transitions import is_valid_charge_level

logger = logging.getLogger(__name__)


@dataclass
class InventoryRecord:
    battery_id: uuid.UUID
    battery_code: str
    serial_number: str
    status: str
    charge_level: int
    soh_percentage: float
    total_cycles: int
    battery_type_id: uuid.UUID | None
    type_code: str | None
    type_name: str | None
    manufacturer: str | None
    capacity_kwh: float
    station_id: uuid.UUID | None
    last_maintenance_date: date | None
    next_maintenance_date: date | None
    last_swap_date: datetime | None
    created_at: datetime | None
    updated_at: datetime | None


def to_inventory_record(battery: Any) -> InventoryRecord:
    """Flatten a battery and its type into an ``InventoryRecord``.

    A missing type yields ``None`` descriptive fields and zero capacity.
    """
    battery_type = battery.battery_type
    return InventoryRecord(
        battery_id=battery.id,
        battery_code=battery.battery_code,
        serial_number=battery.serial_number,
        status=battery.status,
        charge_level=battery.charge_level,
        soh_percentage=battery.soh_percentage,
        total_cycles=battery.total_cycles,
        battery_type_id=battery.battery_type_id,
        type_code=battery_type.type_code if battery_type else None,
        type_name=battery_type.type_name if battery_type else None,
        manufacturer=battery_type.manufacturer if battery_type else None,
        capacity_kwh=battery_type.capacity_kwh if battery_type else 0.0,
        station_id=battery.station_id,
        last_maintenance_date=battery.last_maintenance_date,
        next_maintenance_date=battery.next_maintenance_date,
        last_swap_date=battery.last_swap_date,
        created_at=battery.created_at,
        updated_at=battery.updated_at,
    )


class InventoryService:
    """Orchestrates the battery store for the inventory use cases.

    Parameters
    ----------
    store : BatteryStore
        Backing store.
    strict_status : bool
        When True, ``update_status`` only accepts ``BatteryStatus`` values and
        raises ``InvalidStatusError`` otherwise.  Default False keeps the
        unvalidated overwrite.
    """

    def __init__(self, store: BatteryStore, strict_status: bool = False) -> None:
        self._store = store
        self.strict_status = strict_status

    # ------------------------------------------------------------------
    # Listing and detail
    # ------------------------------------------------------------------

    async def list_inventory(self, criteria: FilterCriteria | None = None) -> list[InventoryRecord]:
        batteries = await self._store.find_batteries(criteria)
        return [to_inventory_record(b) for b in batteries]

    async def list_all(self) -> list[InventoryRecord]:
        return await self.list_inventory(None)

    async def list_by_status(
        self, status: BatteryStatus | str, station_id: uuid.UUID | None = None
    ) -> list[InventoryRecord]:
        value = status.value if isinstance(status, BatteryStatus) else status
        return await self.list_inventory(FilterCriteria(statuses=[value], station_id=station_id))

    async def search(
        self,
        status: str | None = None,
        battery_type_id: uuid.UUID | None = None,
        min_capacity: float | None = None,
        max_capacity: float | None = None,
        station_id: uuid.UUID | None = None,
    ) -> list[InventoryRecord]:
        criteria = FilterCriteria(
            statuses=[status] if status else None,
            battery_type_ids=[battery_type_id] if battery_type_id else None,
            min_capacity_kwh=min_capacity,
            max_capacity_kwh=max_capacity,
            station_id=station_id,
        )
        return await self.list_inventory(criteria)

    async def get_battery(self, battery_id: uuid.UUID) -> InventoryRecord | None:
        battery = await self._store.find_battery_by_id(battery_id)
        if battery is None:
            return None
        return to_inventory_record(battery)

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    async def get_summary(self, station_id: uuid.UUID | None = None) -> InventorySummary:
        status_counts = await self._store.count_by_status(station_id)
        type_stats = await self._store.stats_by_type(station_id)
        capacity_stats = await self._store.stats_by_capacity(station_id)
        return build_summary(status_counts, type_stats, capacity_stats)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    async def update_status(
        self, battery_id: uuid.UUID, status: str
    ) -> tuple[bool, InventoryRecord | None]:
        if self.strict_status:
            status = parse_status(status).value

        logger.info(
            "Updating battery %s status to %s",
            battery_id,
            status,
            extra={"battery_id": battery_id, "battery_status": status},
        )
        if not await self._store.write_status(battery_id, status):
            logger.warning("Status update for battery %s: not found", battery_id)
            return False, None
        return True, await self.get_battery(battery_id)

    async def update_charge_level(
        self, battery_id: uuid.UUID, charge_level: int
    ) -> tuple[bool, InventoryRecord | None]:
        if not is_valid_charge_level(charge_level):
            logger.warning(
                "Rejected charge level %s for battery %s: outside 0-100", charge_level, battery_id
            )
            return False, None

        logger.info(
            "Updating battery %s charge level to %s",
            battery_id,
            charge_level,
            extra={"battery_id": battery_id, "charge_level": charge_level},
        )
        if not await self._store.write_charge_level(battery_id, charge_level):
            logger.warning("Charge level update for battery %s: not found", battery_id)
            return False, None
        return True, await self.get_battery(battery_id)

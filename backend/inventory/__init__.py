"""Battery inventory core -- filtering, status transitions, and fleet aggregation."""

from .status import BatteryStatus, InvalidStatusError, parse_status
from .entities import Battery, BatteryType
from .filters import FilterCriteria, compile_filter, order_batteries
from .transitions import apply_charge_update, derive_status, set_status
from .aggregation import (
    CapacityStats,
    InventorySummary,
    TypeStats,
    build_summary,
    count_by_status,
    stats_by_capacity,
    stats_by_type,
    summarize,
)
from .store import BatteryStore, InMemoryBatteryStore
from .service import InventoryRecord, InventoryService, to_inventory_record

__all__ = [
    "BatteryStatus",
    "InvalidStatusError",
    "parse_status",
    "Battery",
    "BatteryType",
    "FilterCriteria",
    "compile_filter",
    "order_batteries",
    "apply_charge_update",
    "derive_status",
    "set_status",
    "CapacityStats",
    "InventorySummary",
    "TypeStats",
    "build_summary",
    "count_by_status",
    "stats_by_capacity",
    "stats_by_type",
    "summarize",
    "BatteryStore",
    "InMemoryBatteryStore",
    "InventoryRecord",
    "InventoryService",
    "to_inventory_record",
]

"""Plain battery and battery-type records used by the in-memory store."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class BatteryType:
    type_code: str
    type_name: str
    manufacturer: str
    capacity_kwh: float
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class Battery:
    """A swappable battery pack.

    Attribute names match the ``app.models.battery.Battery`` ORM model so that
    the filter, transition and aggregation functions accept either.
    """

    battery_code: str
    serial_number: str
    status: str
    charge_level: int
    soh_percentage: float = 100.0
    total_cycles: int = 0
    battery_type: BatteryType | None = None
    station_id: uuid.UUID | None = None
    last_maintenance_date: date | None = None
    next_maintenance_date: date | None = None
    last_swap_date: datetime | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def battery_type_id(self) -> uuid.UUID | None:
        return self.battery_type.id if self.battery_type is not None else None

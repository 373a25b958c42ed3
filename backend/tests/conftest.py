"""Shared test fixtures for the inventory core and API tests."""

from __future__ import annotations

import uuid

import pytest

from inventory.entities import Battery, BatteryType
from inventory.store import InMemoryBatteryStore

STATION_A = uuid.UUID("00000000-0000-0000-0000-00000000000a")
STATION_B = uuid.UUID("00000000-0000-0000-0000-00000000000b")


# ======================================================================
# Battery types
# ======================================================================

@pytest.fixture
def scooter_type() -> BatteryType:
    """1.5 kWh scooter pack."""
    return BatteryType(
        type_code="SCT-15",
        type_name="Scooter Standard",
        manufacturer="VoltCell",
        capacity_kwh=1.5,
    )


@pytest.fixture
def moto_type() -> BatteryType:
    """3.0 kWh motorbike pack."""
    return BatteryType(
        type_code="MTO-30",
        type_name="Moto Long Range",
        manufacturer="Amperion",
        capacity_kwh=3.0,
    )


# ======================================================================
# Battery population
# ======================================================================

def make_battery(
    code: str,
    status: str,
    charge_level: int,
    battery_type: BatteryType | None = None,
    station_id: uuid.UUID | None = STATION_A,
    soh_percentage: float = 95.0,
    serial_number: str | None = None,
) -> Battery:
    return Battery(
        battery_code=code,
        serial_number=serial_number or f"SN-{code}",
        status=status,
        charge_level=charge_level,
        soh_percentage=soh_percentage,
        battery_type=battery_type,
        station_id=station_id,
    )


@pytest.fixture
def fleet(scooter_type, moto_type) -> list[Battery]:
    """Mixed fleet over two stations and two types."""
    return [
        make_battery("BAT-001", "available", 100, scooter_type),
        make_battery("BAT-002", "available", 96, scooter_type, soh_percentage=80.0),
        make_battery("BAT-003", "charging", 55, scooter_type),
        make_battery("BAT-004", "charging", 30, moto_type, station_id=STATION_B),
        make_battery("BAT-005", "maintenance", 10, moto_type, soh_percentage=60.0),
        make_battery("BAT-006", "in_use", 70, moto_type, station_id=STATION_B),
        make_battery("BAT-007", "faulty", 0, scooter_type, station_id=STATION_B),
        make_battery("BAT-008", "retired", 5, moto_type, soh_percentage=40.0),
    ]


@pytest.fixture
def store(fleet) -> InMemoryBatteryStore:
    return InMemoryBatteryStore(batteries=fleet)


@pytest.fixture
def battery_factory():
    """Return ``make_battery`` for tests that build their own population."""
    return make_battery


@pytest.fixture
def station_a() -> uuid.UUID:
    return STATION_A


@pytest.fixture
def station_b() -> uuid.UUID:
    return STATION_B

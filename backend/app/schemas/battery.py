import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field


class BatteryFilter(BaseModel):
    statuses: list[str] | None = None
    battery_type_ids: list[uuid.UUID] | None = None
    min_capacity_kwh: float | None = Field(default=None, ge=0)
    max_capacity_kwh: float | None = Field(default=None, ge=0)
    min_charge_level: int | None = Field(default=None, ge=0, le=100)
    max_charge_level: int | None = Field(default=None, ge=0, le=100)
    min_soh_percentage: float | None = Field(default=None, ge=0, le=100)
    manufacturer: str | None = None
    station_id: uuid.UUID | None = None
    search_text: str | None = None


class UpdateStatusRequest(BaseModel):
    status: str = Field(min_length=1, max_length=50)


class UpdateChargeLevelRequest(BaseModel):
    charge_level: int = Field(ge=0, le=100)


class BatteryInventoryResponse(BaseModel):
    battery_id: uuid.UUID
    battery_code: str
    serial_number: str
    status: str
    charge_level: int
    soh_percentage: float
    total_cycles: int
    battery_type_id: uuid.UUID | None = None
    type_code: str | None = None
    type_name: str | None = None
    manufacturer: str | None = None
    capacity_kwh: float = 0.0
    station_id: uuid.UUID | None = None
    last_maintenance_date: date | None = None
    next_maintenance_date: date | None = None
    last_swap_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class BatteryTypeInventoryResponse(BaseModel):
    battery_type_id: uuid.UUID
    type_code: str
    type_name: str
    manufacturer: str
    capacity_kwh: float
    total_count: int
    full_count: int
    charging_count: int
    maintenance_count: int

    model_config = {"from_attributes": True}


class BatteryCapacityInventoryResponse(BaseModel):
    capacity_kwh: float
    total_count: int
    full_count: int
    charging_count: int
    maintenance_count: int

    model_config = {"from_attributes": True}


class InventorySummaryResponse(BaseModel):
    total_batteries: int
    full_batteries: int
    charging_batteries: int
    maintenance_batteries: int
    in_use_batteries: int
    available_batteries: int
    damaged_batteries: int
    retired_batteries: int
    battery_type_inventories: list[BatteryTypeInventoryResponse]
    capacity_inventories: list[BatteryCapacityInventoryResponse]

    model_config = {"from_attributes": True}

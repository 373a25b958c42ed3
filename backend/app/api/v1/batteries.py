import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.deps import get_inventory_service
from app.schemas.battery import (
    BatteryFilter,
    BatteryInventoryResponse,
    InventorySummaryResponse,
    UpdateChargeLevelRequest,
    UpdateStatusRequest,
)
from inventory.filters import FilterCriteria
from inventory.service import InventoryService
from inventory.status import BatteryStatus, InvalidStatusError

router = APIRouter()


@router.get("/summary", response_model=InventorySummaryResponse)
async def get_inventory_summary(
    station_id: uuid.UUID | None = None,
    service: InventoryService = Depends(get_inventory_service),
):
    return await service.get_summary(station_id)


@router.get("/", response_model=list[BatteryInventoryResponse])
async def list_batteries(
    station_id: uuid.UUID | None = None,
    service: InventoryService = Depends(get_inventory_service),
):
    if station_id is None:
        return await service.list_all()
    return await service.list_inventory(FilterCriteria(station_id=station_id))


@router.post("/query", response_model=list[BatteryInventoryResponse])
async def query_batteries(
    body: BatteryFilter,
    service: InventoryService = Depends(get_inventory_service),
):
    return await service.list_inventory(FilterCriteria(**body.model_dump()))


@router.get("/available", response_model=list[BatteryInventoryResponse])
async def list_available_batteries(
    station_id: uuid.UUID | None = None,
    service: InventoryService = Depends(get_inventory_service),
):
    return await service.list_by_status(BatteryStatus.AVAILABLE, station_id)


@router.get("/charging", response_model=list[BatteryInventoryResponse])
async def list_charging_batteries(
    station_id: uuid.UUID | None = None,
    service: InventoryService = Depends(get_inventory_service),
):
    return await service.list_by_status(BatteryStatus.CHARGING, station_id)


@router.get("/maintenance", response_model=list[BatteryInventoryResponse])
async def list_maintenance_batteries(
    station_id: uuid.UUID | None = None,
    service: InventoryService = Depends(get_inventory_service),
):
    return await service.list_by_status(BatteryStatus.MAINTENANCE, station_id)


@router.get("/search", response_model=list[BatteryInventoryResponse])
async def search_batteries(
    status_filter: str | None = Query(default=None, alias="status"),
    battery_type_id: uuid.UUID | None = None,
    min_capacity: float | None = Query(default=None, ge=0),
    max_capacity: float | None = Query(default=None, ge=0),
    station_id: uuid.UUID | None = None,
    service: InventoryService = Depends(get_inventory_service),
):
    return await service.search(
        status=status_filter,
        battery_type_id=battery_type_id,
        min_capacity=min_capacity,
        max_capacity=max_capacity,
        station_id=station_id,
    )


@router.get("/{battery_id}", response_model=BatteryInventoryResponse)
async def get_battery(
    battery_id: uuid.UUID,
    service: InventoryService = Depends(get_inventory_service),
):
    battery = await service.get_battery(battery_id)
    if battery is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Battery not found")
    return battery


@router.put("/{battery_id}/status", response_model=BatteryInventoryResponse)
async def update_battery_status(
    battery_id: uuid.UUID,
    body: UpdateStatusRequest,
    service: InventoryService = Depends(get_inventory_service),
):
    try:
        updated, battery = await service.update_status(battery_id, body.status)
    except InvalidStatusError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Battery not found")
    return battery


@router.put("/{battery_id}/charge-level", response_model=BatteryInventoryResponse)
async def update_battery_charge_level(
    battery_id: uuid.UUID,
    body: UpdateChargeLevelRequest,
    service: InventoryService = Depends(get_inventory_service),
):
    updated, battery = await service.update_charge_level(battery_id, body.charge_level)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Battery not found")
    return battery

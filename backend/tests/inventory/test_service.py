"""Tests for inventory.service -- the inventory façade over the in-memory store."""

from __future__ import annotations

import uuid

import pytest

from inventory.filters import FilterCriteria
from inventory.service import InventoryService, to_inventory_record
from inventory.status import BatteryStatus, InvalidStatusError
from inventory.store import BatteryStore, InMemoryBatteryStore

pytestmark = pytest.mark.asyncio


@pytest.fixture
def service(store) -> InventoryService:
    return InventoryService(store)


def _by_code(fleet, code):
    return next(b for b in fleet if b.battery_code == code)


class _PermissiveStore(InMemoryBatteryStore):
    """Writes any charge level as given, without range checks."""

    def __init__(self, batteries):
        super().__init__(batteries=batteries)
        self.charge_writes: list[tuple[uuid.UUID, int]] = []

    async def write_charge_level(self, battery_id, charge_level):
        self.charge_writes.append((battery_id, charge_level))
        battery = self._batteries.get(battery_id)
        if battery is None:
            return False
        battery.charge_level = charge_level
        return True


class TestListing:
    async def test_list_all_ordered(self, service, fleet):
        records = await service.list_all()
        assert len(records) == len(fleet)
        keys = [(r.status, -r.charge_level) for r in records]
        assert keys == sorted(keys)

    async def test_list_with_filter(self, service):
        records = await service.list_inventory(
            FilterCriteria(statuses=["available"], min_soh_percentage=90)
        )
        assert [r.battery_code for r in records] == ["BAT-001"]

    async def test_list_by_status(self, service, station_a):
        records = await service.list_by_status(BatteryStatus.CHARGING, station_a)
        assert [r.battery_code for r in records] == ["BAT-003"]

    async def test_search(self, service):
        records = await service.search(status="charging", min_capacity=2.0)
        assert [r.battery_code for r in records] == ["BAT-004"]

    async def test_search_without_arguments_lists_everything(self, service, fleet):
        assert len(await service.search()) == len(fleet)

    async def test_records_flatten_type(self, service, fleet):
        records = await service.list_inventory(FilterCriteria(search_text="BAT-005"))
        (record,) = records
        battery = _by_code(fleet, "BAT-005")
        assert record.battery_id == battery.id
        assert record.type_code == "MTO-30"
        assert record.manufacturer == "Amperion"
        assert record.capacity_kwh == 3.0
        assert record.battery_type_id == battery.battery_type.id


class TestDetail:
    async def test_get_battery(self, service, fleet):
        battery = fleet[0]
        record = await service.get_battery(battery.id)
        assert record is not None
        assert record.battery_code == battery.battery_code

    async def test_unknown_id_is_none(self, service):
        assert await service.get_battery(uuid.uuid4()) is None

    async def test_missing_type_defaults(self, battery_factory):
        record = to_inventory_record(battery_factory("U", "available", 100, None))
        assert record.capacity_kwh == 0
        assert record.type_code is None
        assert record.battery_type_id is None


class TestSummary:
    async def test_summary_matches_pure_rollup(self, service):
        summary = await service.get_summary()
        assert summary.total_batteries == 8
        assert summary.full_batteries == 2
        assert [s.capacity_kwh for s in summary.capacity_inventories] == [1.5, 3.0]
        assert [s.type_code for s in summary.battery_type_inventories] == ["SCT-15", "MTO-30"]

    async def test_station_scoped(self, service, station_a):
        summary = await service.get_summary(station_a)
        assert summary.total_batteries == 5
        assert summary.retired_batteries == 1

    async def test_recomputed_after_update(self, service, fleet):
        await service.update_charge_level(_by_code(fleet, "BAT-003").id, 99)
        summary = await service.get_summary()
        assert summary.available_batteries == 3
        assert summary.charging_batteries == 1


class TestChargeUpdates:
    async def test_94_to_96(self, battery_factory):
        battery = battery_factory("X", "charging", 94)
        svc = InventoryService(InMemoryBatteryStore(batteries=[battery]))
        updated, record = await svc.update_charge_level(battery.id, 96)
        assert updated
        assert record.status == "available"
        assert record.charge_level == 96

    async def test_low_level_keeps_status(self, service, fleet):
        battery = _by_code(fleet, "BAT-006")
        updated, record = await service.update_charge_level(battery.id, 10)
        assert updated
        assert record.status == "in_use"
        assert record.charge_level == 10

    @pytest.mark.parametrize("level", [-1, 101])
    async def test_out_of_range_rejected(self, service, fleet, level):
        battery = _by_code(fleet, "BAT-003")
        updated, record = await service.update_charge_level(battery.id, level)
        assert (updated, record) == (False, None)
        unchanged = await service.get_battery(battery.id)
        assert unchanged.charge_level == 55
        assert unchanged.status == "charging"

    @pytest.mark.parametrize("level", [-5, 101, 250])
    async def test_out_of_range_never_reaches_store(self, fleet, level):
        store = _PermissiveStore(fleet)
        svc = InventoryService(store)
        battery = _by_code(fleet, "BAT-003")
        assert await svc.update_charge_level(battery.id, level) == (False, None)
        assert store.charge_writes == []

    async def test_unknown_id(self, service):
        assert await service.update_charge_level(uuid.uuid4(), 50) == (False, None)

    async def test_last_write_wins(self, service, fleet):
        battery_id = _by_code(fleet, "BAT-003").id
        await service.update_charge_level(battery_id, 40)
        await service.update_charge_level(battery_id, 97)
        record = await service.get_battery(battery_id)
        assert (record.status, record.charge_level) == ("available", 97)


class TestStatusUpdates:
    async def test_permissive_overwrite(self, service, fleet):
        battery = _by_code(fleet, "BAT-001")
        updated, record = await service.update_status(battery.id, "Maintenance")
        assert updated
        assert record.status == "Maintenance"
        assert record.charge_level == 100

    async def test_overwrite_desyncs_status_and_filters(self, service, fleet):
        battery = _by_code(fleet, "BAT-001")
        await service.update_status(battery.id, "Maintenance")
        lowercase = await service.list_by_status("maintenance")
        assert battery.battery_code not in {r.battery_code for r in lowercase}

    async def test_unknown_id(self, service):
        assert await service.update_status(uuid.uuid4(), "available") == (False, None)

    async def test_strict_mode_rejects_unknown_text(self, store, fleet):
        svc = InventoryService(store, strict_status=True)
        battery = _by_code(fleet, "BAT-001")
        with pytest.raises(InvalidStatusError):
            await svc.update_status(battery.id, "Maintenance")
        record = await svc.get_battery(battery.id)
        assert record.status == "available"

    async def test_strict_mode_accepts_known_value(self, store, fleet):
        svc = InventoryService(store, strict_status=True)
        updated, record = await svc.update_status(_by_code(fleet, "BAT-001").id, "retired")
        assert updated
        assert record.status == "retired"


class TestInMemoryStore:
    async def test_satisfies_protocol(self, store):
        assert isinstance(store, BatteryStore)

    async def test_reads_are_copies(self, store, fleet):
        battery = fleet[0]
        found = await store.find_battery_by_id(battery.id)
        found.status = "tampered"
        again = await store.find_battery_by_id(battery.id)
        assert again.status == battery.status

    async def test_empty_criteria_skip_filter_compilation(self, store, fleet, monkeypatch):
        def fail(criteria):
            raise AssertionError("empty criteria should not be compiled")

        monkeypatch.setattr("inventory.store.compile_filter", fail)
        found = await store.find_batteries(FilterCriteria(statuses=[], search_text=""))
        assert len(found) == len(fleet)
        keys = [(b.status, -b.charge_level) for b in found]
        assert keys == sorted(keys)

    async def test_type_comes_from_seeded_battery(self, battery_factory, scooter_type):
        battery = battery_factory("X", "available", 90, scooter_type)
        store = InMemoryBatteryStore(batteries=[battery])
        found = await store.find_battery_by_id(battery.id)
        assert found.battery_type is scooter_type
        assert found.battery_type_id == scooter_type.id

    async def test_rejected_charge_level_not_written(self, store, fleet):
        battery = fleet[0]
        assert await store.write_charge_level(battery.id, 150) is False
        assert (await store.find_battery_by_id(battery.id)).charge_level == 100

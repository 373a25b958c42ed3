"""SQLAlchemy implementation of the inventory ``BatteryStore`` contract.

Each filter clause mirrors its in-memory counterpart in ``inventory.filters``.
Substring clauses use ``LIKE``, so case sensitivity follows the database
collation (PostgreSQL: sensitive, SQLite: insensitive for ASCII).
"""

from __future__ import annotations

import uuid

from sqlalchemy import Select, case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from app.models.battery import Battery
from app.models.battery_type import BatteryType
from inventory.aggregation import CapacityStats, TypeStats
from inventory.filters import FilterCriteria
from inventory.status import CHARGING_LITERAL, FULL_LITERAL, MAINTENANCE_LITERAL
from inventory.transitions import apply_charge_update, set_status


def _apply_criteria(stmt: Select, criteria: FilterCriteria | None) -> Select:
    if criteria is None or criteria.is_empty():
        return stmt

    if criteria.statuses:
        stmt = stmt.where(
            or_(*[Battery.status.contains(s, autoescape=True) for s in criteria.statuses])
        )
    if criteria.battery_type_ids:
        # Matched as text against code/name, as in the in-memory filter
        needles = [str(type_id) for type_id in criteria.battery_type_ids]
        stmt = stmt.where(
            or_(
                *[
                    or_(
                        BatteryType.type_code.contains(n, autoescape=True),
                        BatteryType.type_name.contains(n, autoescape=True),
                    )
                    for n in needles
                ]
            )
        )
    if criteria.min_capacity_kwh is not None:
        stmt = stmt.where(BatteryType.capacity_kwh >= criteria.min_capacity_kwh)
    if criteria.max_capacity_kwh is not None:
        stmt = stmt.where(BatteryType.capacity_kwh <= criteria.max_capacity_kwh)
    if criteria.min_charge_level is not None:
        stmt = stmt.where(Battery.charge_level >= criteria.min_charge_level)
    if criteria.max_charge_level is not None:
        stmt = stmt.where(Battery.charge_level <= criteria.max_charge_level)
    if criteria.min_soh_percentage is not None:
        stmt = stmt.where(Battery.soh_percentage >= criteria.min_soh_percentage)
    if criteria.manufacturer:
        stmt = stmt.where(BatteryType.manufacturer.contains(criteria.manufacturer, autoescape=True))
    if criteria.station_id is not None:
        stmt = stmt.where(Battery.station_id == criteria.station_id)
    if criteria.search_text:
        stmt = stmt.where(
            or_(
                Battery.battery_code.contains(criteria.search_text, autoescape=True),
                Battery.serial_number.contains(criteria.search_text, autoescape=True),
            )
        )
    return stmt


def _sub_count(literal: str):
    return func.coalesce(func.sum(case((Battery.status == literal, 1), else_=0)), 0)


def _scope(stmt: Select, station_id: uuid.UUID | None) -> Select:
    if station_id is not None:
        stmt = stmt.where(Battery.station_id == station_id)
    return stmt


class SqlAlchemyBatteryStore:
    """``BatteryStore`` over an ``AsyncSession``.

    Updates fetch, mutate through ``inventory.transitions`` and commit.  There
    is no version column, so concurrent writers resolve as last write wins.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_batteries(self, criteria: FilterCriteria | None = None) -> list[Battery]:
        stmt = (
            select(Battery)
            .join(BatteryType, Battery.battery_type_id == BatteryType.id)
            .options(contains_eager(Battery.battery_type))
            .execution_options(populate_existing=True)
        )
        stmt = _apply_criteria(stmt, criteria)
        stmt = stmt.order_by(Battery.status, Battery.charge_level.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().unique().all())

    async def find_battery_by_id(self, battery_id: uuid.UUID) -> Battery | None:
        result = await self.db.execute(
            select(Battery)
            .where(Battery.id == battery_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def count_by_status(self, station_id: uuid.UUID | None = None) -> dict[str, int]:
        stmt = _scope(
            select(Battery.status, func.count(Battery.id)).group_by(Battery.status), station_id
        )
        result = await self.db.execute(stmt)
        return {status: count for status, count in result.all()}

    async def stats_by_type(self, station_id: uuid.UUID | None = None) -> list[TypeStats]:
        stmt = (
            select(
                BatteryType.id,
                BatteryType.type_code,
                BatteryType.type_name,
                BatteryType.manufacturer,
                BatteryType.capacity_kwh,
                func.count(Battery.id),
                _sub_count(FULL_LITERAL),
                _sub_count(CHARGING_LITERAL),
                _sub_count(MAINTENANCE_LITERAL),
            )
            .select_from(Battery)
            .join(BatteryType, Battery.battery_type_id == BatteryType.id)
            .group_by(
                BatteryType.id,
                BatteryType.type_code,
                BatteryType.type_name,
                BatteryType.manufacturer,
                BatteryType.capacity_kwh,
            )
            .order_by(BatteryType.capacity_kwh, BatteryType.type_name)
        )
        result = await self.db.execute(_scope(stmt, station_id))
        return [
            TypeStats(
                battery_type_id=row[0],
                type_code=row[1],
                type_name=row[2],
                manufacturer=row[3],
                capacity_kwh=row[4],
                total_count=row[5],
                full_count=int(row[6]),
                charging_count=int(row[7]),
                maintenance_count=int(row[8]),
            )
            for row in result.all()
        ]

    async def stats_by_capacity(
        self, station_id: uuid.UUID | None = None
    ) -> list[CapacityStats]:
        stmt = (
            select(
                BatteryType.capacity_kwh,
                func.count(Battery.id),
                _sub_count(FULL_LITERAL),
                _sub_count(CHARGING_LITERAL),
                _sub_count(MAINTENANCE_LITERAL),
            )
            .select_from(Battery)
            .join(BatteryType, Battery.battery_type_id == BatteryType.id)
            .group_by(BatteryType.capacity_kwh)
            .order_by(BatteryType.capacity_kwh)
        )
        result = await self.db.execute(_scope(stmt, station_id))
        return [
            CapacityStats(
                capacity_kwh=row[0],
                total_count=row[1],
                full_count=int(row[2]),
                charging_count=int(row[3]),
                maintenance_count=int(row[4]),
            )
            for row in result.all()
        ]

    async def write_status(self, battery_id: uuid.UUID, status: str) -> bool:
        battery = await self.db.get(Battery, battery_id, populate_existing=True)
        if battery is None:
            return False
        set_status(battery, status)
        await self.db.commit()
        return True

    async def write_charge_level(self, battery_id: uuid.UUID, charge_level: int) -> bool:
        battery = await self.db.get(Battery, battery_id, populate_existing=True)
        if battery is None:
            return False
        _, accepted = apply_charge_update(battery, charge_level)
        if not accepted:
            return False
        await self.db.commit()
        return True

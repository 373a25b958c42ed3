"""
Battery filter criteria and their compilation into a single predicate.

Every field of ``FilterCriteria`` is an independent optional constraint.
``compile_filter`` turns each present field into one clause and ANDs the
clauses together; an empty criteria object matches every battery.  The SQL
store expresses the same clauses as SQL (see
``app.repositories.battery_repository``), so any change here must be made
there too.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

Predicate = Callable[[Any], bool]


@dataclass(frozen=True)
class FilterCriteria:
    """Sparse battery query.  ``None`` or an empty value means "no constraint"."""

    statuses: Sequence[str] | None = None
    battery_type_ids: Sequence[uuid.UUID] | None = None
    min_capacity_kwh: float | None = None
    max_capacity_kwh: float | None = None
    min_charge_level: int | None = None
    max_charge_level: int | None = None
    min_soh_percentage: float | None = None
    manufacturer: str | None = None
    station_id: uuid.UUID | None = None
    search_text: str | None = None

    def is_empty(self) -> bool:
        return not compile_clauses(self)


# ----------------------------------------------------------------------
# Clause builders
# ----------------------------------------------------------------------


def status_clause(statuses: Sequence[str]) -> Predicate:
    # Containment, not equality: "charging" also matches "charging_slow".
    wanted = list(statuses)

    def match(battery: Any) -> bool:
        status = battery.status or ""
        return any(s in status for s in wanted)

    return match


def battery_type_clause(type_ids: Sequence[uuid.UUID]) -> Predicate:
    # Type ids are matched as text against the type code and name, never
    # against the type's own id.
    needles = [str(type_id) for type_id in type_ids]

    def match(battery: Any) -> bool:
        battery_type = battery.battery_type
        if battery_type is None:
            return False
        code = battery_type.type_code or ""
        name = battery_type.type_name or ""
        return any(n in code or n in name for n in needles)

    return match


def capacity_clause(min_kwh: float | None, max_kwh: float | None) -> Predicate:
    def match(battery: Any) -> bool:
        battery_type = battery.battery_type
        if battery_type is None:
            return False
        capacity = battery_type.capacity_kwh
        if min_kwh is not None and capacity < min_kwh:
            return False
        if max_kwh is not None and capacity > max_kwh:
            return False
        return True

    return match


def charge_level_clause(min_level: int | None, max_level: int | None) -> Predicate:
    def match(battery: Any) -> bool:
        if min_level is not None and battery.charge_level < min_level:
            return False
        if max_level is not None and battery.charge_level > max_level:
            return False
        return True

    return match


def soh_clause(min_soh: float) -> Predicate:
    return lambda battery: battery.soh_percentage >= min_soh


def manufacturer_clause(manufacturer: str) -> Predicate:
    def match(battery: Any) -> bool:
        battery_type = battery.battery_type
        if battery_type is None or battery_type.manufacturer is None:
            return False
        return manufacturer in battery_type.manufacturer

    return match


def station_clause(station_id: uuid.UUID) -> Predicate:
    return lambda battery: battery.station_id == station_id


def search_text_clause(text: str) -> Predicate:
    # Code OR serial number.
    def match(battery: Any) -> bool:
        return text in (battery.battery_code or "") or text in (battery.serial_number or "")

    return match


# ----------------------------------------------------------------------
# Compilation
# ----------------------------------------------------------------------


def compile_clauses(criteria: FilterCriteria | None) -> list[Predicate]:
    """Return one predicate per present constraint in ``criteria``."""
    if criteria is None:
        return []

    clauses: list[Predicate] = []
    if criteria.statuses:
        clauses.append(status_clause(criteria.statuses))
    if criteria.battery_type_ids:
        clauses.append(battery_type_clause(criteria.battery_type_ids))
    if criteria.min_capacity_kwh is not None or criteria.max_capacity_kwh is not None:
        clauses.append(capacity_clause(criteria.min_capacity_kwh, criteria.max_capacity_kwh))
    if criteria.min_charge_level is not None or criteria.max_charge_level is not None:
        clauses.append(charge_level_clause(criteria.min_charge_level, criteria.max_charge_level))
    if criteria.min_soh_percentage is not None:
        clauses.append(soh_clause(criteria.min_soh_percentage))
    if criteria.manufacturer:
        clauses.append(manufacturer_clause(criteria.manufacturer))
    if criteria.station_id is not None:
        clauses.append(station_clause(criteria.station_id))
    if criteria.search_text:
        clauses.append(search_text_clause(criteria.search_text))
    return clauses


def compile_filter(criteria: FilterCriteria | None) -> Predicate:
    """Compile ``criteria`` into a single predicate over batteries.

    The result is the logical AND of every present clause.  With no clauses
    it accepts every battery.
    """
    clauses = compile_clauses(criteria)

    def predicate(battery: Any) -> bool:
        return all(clause(battery) for clause in clauses)

    return predicate


def battery_sort_key(battery: Any) -> tuple[str, int]:
    return (battery.status or "", -battery.charge_level)


def order_batteries(batteries: Iterable[Any]) -> list[Any]:
    """Order by status ascending, then charge level descending (stable)."""
    return sorted(batteries, key=battery_sort_key)

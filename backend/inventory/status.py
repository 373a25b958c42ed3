"""
Battery lifecycle status values.

Status is persisted as free text.  ``BatteryStatus`` names the values the
rest of the system writes and reads, and ``parse_status`` is the one place
that turns arbitrary text into a member.  Direct status overwrites do not go
through it unless strict status updates are enabled.
"""

from __future__ import annotations

from enum import Enum


class BatteryStatus(str, Enum):
    AVAILABLE = "available"
    CHARGING = "charging"
    IN_USE = "in_use"
    MAINTENANCE = "maintenance"
    RETIRED = "retired"
    FAULTY = "faulty"


class InvalidStatusError(ValueError):
    """Raised when status text does not name a ``BatteryStatus``."""

    def __init__(self, value: str) -> None:
        allowed = ", ".join(s.value for s in BatteryStatus)
        super().__init__(f"Unknown battery status {value!r}; expected one of: {allowed}")
        self.value = value


def parse_status(value: str) -> BatteryStatus:
    """Parse status text into a ``BatteryStatus``.

    Matching is exact on the stored spelling; ``"Maintenance"`` is not
    ``"maintenance"``.

    Raises
    ------
    InvalidStatusError
        If ``value`` is not one of the enumerated status strings.
    """
    try:
        return BatteryStatus(value)
    except ValueError:
        raise InvalidStatusError(value) from None


# Summary bucket -> status literal read from the raw per-status grouping.
# "available" feeds two buckets; statuses outside this table only reach the total.
SUMMARY_BUCKETS: dict[str, str] = {
    "full_batteries": BatteryStatus.AVAILABLE.value,
    "charging_batteries": BatteryStatus.CHARGING.value,
    "maintenance_batteries": BatteryStatus.MAINTENANCE.value,
    "in_use_batteries": BatteryStatus.IN_USE.value,
    "available_batteries": BatteryStatus.AVAILABLE.value,
    "damaged_batteries": BatteryStatus.FAULTY.value,
    "retired_batteries": BatteryStatus.RETIRED.value,
}

# Literals compared (exact, case-sensitive) by the per-type and per-capacity
# sub-counts.  They do not match the lowercase values written elsewhere.
FULL_LITERAL = "Full"
CHARGING_LITERAL = "Charging"
MAINTENANCE_LITERAL = "Maintenance"

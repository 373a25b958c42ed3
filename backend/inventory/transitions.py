"""
Charge-driven status transitions and direct status overwrites.

``apply_charge_update`` is the only path that keeps ``status`` and
``charge_level`` consistent.  ``set_status`` writes any text and leaves the
charge level alone, so after an overwrite the two can disagree until the
next charge update.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .status import BatteryStatus

MIN_CHARGE_LEVEL = 0
MAX_CHARGE_LEVEL = 100
FULL_CHARGE_THRESHOLD = 95
LOW_CHARGE_THRESHOLD = 20


def is_valid_charge_level(level: int) -> bool:
    return MIN_CHARGE_LEVEL <= level <= MAX_CHARGE_LEVEL


def derive_status(new_level: int, current_status: str) -> str:
    """Return the status implied by ``new_level``.

    * ``new_level >= 95`` -> ``available``
    * ``20 < new_level < 95`` -> ``charging``
    * ``new_level <= 20`` -> ``current_status`` (no low-charge state exists)
    """
    if new_level >= FULL_CHARGE_THRESHOLD:
        return BatteryStatus.AVAILABLE.value
    if new_level > LOW_CHARGE_THRESHOLD:
        return BatteryStatus.CHARGING.value
    return current_status


def apply_charge_update(
    battery: Any, new_level: int, now: datetime | None = None
) -> tuple[Any, bool]:
    """Record a new charge level observation on ``battery``.

    Parameters
    ----------
    battery : Battery
        Any object with ``charge_level``, ``status`` and ``updated_at``
        attributes.  Mutated in place when accepted.
    new_level : int
        Observed charge level, 0-100.
    now : datetime, optional
        Modification timestamp.  Defaults to the current UTC time.

    Returns
    -------
    tuple[Battery, bool]
        ``(battery, accepted)``.  When ``new_level`` is out of range the
        battery is returned untouched with ``accepted=False``.
    """
    if not is_valid_charge_level(new_level):
        return battery, False

    battery.charge_level = new_level
    battery.status = derive_status(new_level, battery.status)
    battery.updated_at = now or datetime.now(timezone.utc)
    return battery, True


def set_status(battery: Any, status: str, now: datetime | None = None) -> Any:
    """Overwrite ``battery.status`` with ``status`` verbatim."""
    battery.status = status
    battery.updated_at = now or datetime.now(timezone.utc)
    return battery

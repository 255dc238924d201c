# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Clock collaborators and calendar-date normalization.

Renewal math works on calendar dates only. ``today_in_zone`` is the single
place where an instant becomes a date, always through one fixed zone, so two
callers can never disagree about which day it is.
"""

from datetime import date, datetime, timezone
from typing import Protocol, runtime_checkable
from zoneinfo import ZoneInfo

from beartype import beartype


@runtime_checkable
class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime:
        """Return the current timezone-aware instant."""
        ...


class SystemClock:
    """Wall clock in UTC."""

    @beartype
    def now(self) -> datetime:
        """Return the current UTC instant."""
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock pinned to one instant (for tests and replays)."""

    def __init__(self, moment: datetime) -> None:
        """Pin the clock; naive instants are read as UTC."""
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        self._moment = moment

    @beartype
    def now(self) -> datetime:
        """Return the pinned instant."""
        return self._moment


@beartype
def today_in_zone(moment: datetime, zone: str = "UTC") -> date:
    """Calendar date of ``moment`` in ``zone``.

    Naive datetimes are treated as UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(ZoneInfo(zone)).date()


@beartype
def as_calendar_date(value: date) -> date:
    """Drop the time of day from datetimes; plain dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value

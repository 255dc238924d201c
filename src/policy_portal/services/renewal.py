# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Renewal classification.

Pure functions of ``(status, expiry_date, today)``. ``today`` is always a
calendar date supplied by the caller (see ``core.clock.today_in_zone``);
nothing here reads the system clock.

Precedence:

1. status other than ACTIVE -> NOT_ACTIVE, whatever the dates say
2. days <= 0 -> EXPIRED_BY_DATE (backend still says ACTIVE)
3. 0 < days <= 30 -> EXPIRING_SOON
4. otherwise -> ACTIVE_FAR
"""

from datetime import date
from typing import Final

from beartype import beartype

from ..core.clock import as_calendar_date
from ..models.policy import Policy, PolicyStatus
from ..models.renewal import RenewalInfo, RenewalState, UrgencyTier

EXPIRING_WINDOW_DAYS: Final = 30
URGENT_WINDOW_DAYS: Final = 7
EXPIRED_LABEL: Final = "Expired"


@beartype
def days_until_expiry(expiry_date: date, today: date) -> int:
    """Signed whole calendar days from ``today`` to ``expiry_date``."""
    return (as_calendar_date(expiry_date) - as_calendar_date(today)).days


@beartype
def classify_status(status: PolicyStatus, expiry_date: date, today: date) -> RenewalInfo:
    """Classify from the raw status and expiry date."""
    days = days_until_expiry(expiry_date, today)

    if status != PolicyStatus.ACTIVE:
        state = RenewalState.NOT_ACTIVE
    elif days <= 0:
        state = RenewalState.EXPIRED_BY_DATE
    elif days <= EXPIRING_WINDOW_DAYS:
        state = RenewalState.EXPIRING_SOON
    else:
        state = RenewalState.ACTIVE_FAR

    return RenewalInfo(days_until_expiry=days, renewal_state=state)


@beartype
def classify(policy: Policy, today: date) -> RenewalInfo:
    """Classify a policy as of ``today``."""
    return classify_status(policy.policy_status, policy.expiry_date, today)


@beartype
def is_expiring_soon(policy: Policy, today: date) -> bool:
    """ACTIVE and expiring within the window (day 0 excluded)."""
    return classify(policy, today).renewal_state == RenewalState.EXPIRING_SOON


@beartype
def urgency_tier(days: int) -> UrgencyTier:
    """Colour tier of the days-remaining column."""
    if days <= URGENT_WINDOW_DAYS:
        return UrgencyTier.URGENT
    if days <= EXPIRING_WINDOW_DAYS:
        return UrgencyTier.WARNING
    return UrgencyTier.SAFE


@beartype
def expiry_label(days: int) -> str:
    """Per-row text: ``"12 days"`` or ``"Expired"``."""
    if days > 0:
        return f"{days} days"
    return EXPIRED_LABEL

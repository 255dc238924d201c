# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Filter, search and summary counts over the policy collection.

Everything here is a pure transform of an in-memory snapshot. A policy is
visible when it passes every active predicate (status bucket, free-text
search, each advanced constraint). Input order is preserved; sorting is the
caller's business (see ``sort_by_expiry``).

The EXPIRED tab follows the backend status while the EXPIRING tab uses date
math on ACTIVE policies. The two notions of "expired" are kept apart on
purpose: an ACTIVE policy past its expiry date appears in neither tab.
"""

from collections.abc import Sequence
from datetime import date, timedelta
from typing import Generic, TypeVar

from beartype import beartype

from ..core.errors import StaleCriteria
from ..core.result_types import Err, Ok
from ..models.filters import (
    AdvancedFilters,
    DashboardStats,
    FilterCriteria,
    PolicyStats,
    StatusBucket,
)
from ..models.policy import Policy, PolicyStatus
from .renewal import EXPIRING_WINDOW_DAYS, is_expiring_soon

T = TypeVar("T")


@beartype
def matches_bucket(policy: Policy, bucket: StatusBucket, today: date) -> bool:
    """Tab predicate."""
    if bucket == StatusBucket.ACTIVE:
        return policy.policy_status == PolicyStatus.ACTIVE
    if bucket == StatusBucket.EXPIRING:
        # EXPIRING_SOON already implies ACTIVE
        return is_expiring_soon(policy, today)
    if bucket == StatusBucket.EXPIRED:
        return policy.policy_status == PolicyStatus.EXPIRED
    return True


@beartype
def searchable_fields(policy: Policy) -> tuple[str, ...]:
    """Lower-cased fields the search box looks at."""
    return tuple(
        value.lower()
        for value in (
            policy.policy_number,
            policy.client_full_name,
            policy.client_email,
            policy.client_phone_number,
            policy.policy_type.value,
            policy.policy_description or "",
        )
    )


@beartype
def matches_search(policy: Policy, query: str) -> bool:
    """Case-insensitive substring match on any searchable field."""
    needle = query.strip().lower()
    if not needle:
        return True
    return any(needle in field for field in searchable_fields(policy))


@beartype
def matches_advanced(policy: Policy, advanced: AdvancedFilters) -> bool:
    """Advanced-panel predicate; unset constraints pass."""
    if advanced.policy_type is not None and policy.policy_type != advanced.policy_type:
        return False
    if (
        advanced.premium_frequency is not None
        and policy.premium_frequency != advanced.premium_frequency
    ):
        return False
    if advanced.min_premium is not None and policy.premium < advanced.min_premium:
        return False
    if advanced.max_premium is not None and policy.premium > advanced.max_premium:
        return False
    if advanced.expiry_from is not None and policy.expiry_date < advanced.expiry_from:
        return False
    if advanced.expiry_to is not None and policy.expiry_date > advanced.expiry_to:
        return False
    return True


@beartype
def matches(policy: Policy, criteria: FilterCriteria, today: date) -> bool:
    """Full conjunction for one policy."""
    return (
        matches_bucket(policy, criteria.status_bucket, today)
        and matches_search(policy, criteria.search_query)
        and matches_advanced(policy, criteria.advanced)
    )


@beartype
def filter_policies(
    policies: Sequence[Policy], criteria: FilterCriteria, today: date
) -> list[Policy]:
    """Visible subset of ``policies`` in input order."""
    return [policy for policy in policies if matches(policy, criteria, today)]


@beartype
def aggregate(policies: Sequence[Policy], today: date) -> PolicyStats:
    """Tab counts over the whole collection, ignoring any applied filter."""
    active = expiring = expired = 0
    for policy in policies:
        if policy.policy_status == PolicyStatus.ACTIVE:
            active += 1
            if is_expiring_soon(policy, today):
                expiring += 1
        elif policy.policy_status == PolicyStatus.EXPIRED:
            expired += 1
    return PolicyStats(
        total=len(policies), active=active, expiring=expiring, expired=expired
    )


@beartype
def dashboard_stats(policies: Sequence[Policy], today: date) -> DashboardStats:
    """Landing-page counts.

    The dashboard counts ACTIVE policies expiring anywhere in
    ``[today, today + 30 days]``, so a policy expiring today is included
    here although the EXPIRING tab leaves it out.
    """
    horizon = today + timedelta(days=EXPIRING_WINDOW_DAYS)
    active = [p for p in policies if p.policy_status == PolicyStatus.ACTIVE]
    expiring = sum(1 for p in active if today <= p.expiry_date <= horizon)
    return DashboardStats(
        total_policies=len(policies),
        active_policies=len(active),
        expiring_policies=expiring,
    )


@beartype
def sort_by_expiry(policies: Sequence[Policy]) -> list[Policy]:
    """Stable ascending sort by expiry date (the order the list is kept in)."""
    return sorted(policies, key=lambda policy: policy.expiry_date)


class CriteriaMemo:
    """Single-entry memo for ``filter_policies``.

    A hit requires the very same snapshot object plus equal criteria and
    date. Holding the snapshot keeps its identity from being reused.
    """

    def __init__(self) -> None:
        """Start empty."""
        self._snapshot: Sequence[Policy] | None = None
        self._key: tuple[FilterCriteria, date] | None = None
        self._result: list[Policy] = []
        self.hits = 0
        self.misses = 0

    @beartype
    def filter(
        self, policies: Sequence[Policy], criteria: FilterCriteria, today: date
    ) -> list[Policy]:
        """Memoized ``filter_policies``; returns a fresh list each call."""
        key = (criteria, today)
        if self._snapshot is policies and self._key == key:
            self.hits += 1
            return list(self._result)

        self.misses += 1
        self._result = filter_policies(policies, criteria, today)
        self._snapshot = policies
        self._key = key
        return list(self._result)

    @beartype
    def clear(self) -> None:
        """Forget the cached entry."""
        self._snapshot = None
        self._key = None
        self._result = []


class LatestCriteriaGate(Generic[T]):
    """Last-write-wins guard for filter requests that may complete out of order.

    ``submit`` hands out increasing tickets; ``resolve`` lets a result through
    only if its ticket is still the newest one.
    """

    def __init__(self) -> None:
        """Start with no submissions."""
        self._latest = 0

    @property
    def latest(self) -> int:
        """Most recently issued ticket (0 before any submission)."""
        return self._latest

    @beartype
    def submit(self) -> int:
        """Register a new request and return its ticket."""
        self._latest += 1
        return self._latest

    @beartype
    def is_current(self, ticket: int) -> bool:
        """Whether ``ticket`` is still the newest request."""
        return ticket == self._latest

    def resolve(self, ticket: int, value: T) -> Ok[T] | Err[StaleCriteria]:
        """Pass ``value`` through, or report it stale."""
        if self.is_current(ticket):
            return Ok(value)
        return Err(StaleCriteria(ticket=ticket, latest=self._latest))

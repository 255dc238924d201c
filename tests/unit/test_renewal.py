"""Unit tests for renewal classification."""

from datetime import date, datetime, timedelta

import pytest

from policy_portal.models.policy import PolicyStatus
from policy_portal.models.renewal import RenewalState, UrgencyTier
from policy_portal.services.renewal import (
    classify,
    classify_status,
    days_until_expiry,
    expiry_label,
    is_expiring_soon,
    urgency_tier,
)
from tests.fixtures.test_data import TestDataFactory


class TestDaysUntilExpiry:
    """Calendar-day arithmetic."""

    def test_same_day_is_zero(self, today: date) -> None:
        assert days_until_expiry(today, today) == 0

    def test_future_and_past(self, today: date) -> None:
        assert days_until_expiry(today + timedelta(days=10), today) == 10
        assert days_until_expiry(today - timedelta(days=5), today) == -5

    def test_time_of_day_is_ignored(self, today: date) -> None:
        """A datetime late on the expiry day still counts as that day."""
        expiry = datetime(today.year, today.month, today.day, 23, 59) + timedelta(days=1)
        morning = datetime(today.year, today.month, today.day, 0, 1)
        assert days_until_expiry(expiry, morning) == 1

    def test_crosses_month_and_leap_day(self) -> None:
        assert days_until_expiry(date(2024, 3, 1), date(2024, 2, 28)) == 2
        assert days_until_expiry(date(2025, 1, 1), date(2024, 12, 31)) == 1


class TestClassify:
    """Status-first precedence, then days remaining."""

    def test_active_expiring_today_is_expired_by_date(self, today: date) -> None:
        policy = TestDataFactory.create_policy(expires_in=0, today=today)

        info = classify(policy, today)

        assert info.days_until_expiry == 0
        assert info.renewal_state == RenewalState.EXPIRED_BY_DATE

    def test_active_past_expiry_is_expired_by_date(self, today: date) -> None:
        policy = TestDataFactory.create_policy(expires_in=-12, today=today)

        info = classify(policy, today)

        assert info.days_until_expiry == -12
        assert info.renewal_state == RenewalState.EXPIRED_BY_DATE

    @pytest.mark.parametrize("days", [1, 7, 30])
    def test_active_within_window_is_expiring_soon(self, today: date, days: int) -> None:
        policy = TestDataFactory.create_policy(expires_in=days, today=today)
        assert classify(policy, today).renewal_state == RenewalState.EXPIRING_SOON

    @pytest.mark.parametrize("days", [31, 365])
    def test_active_beyond_window_is_active_far(self, today: date, days: int) -> None:
        policy = TestDataFactory.create_policy(expires_in=days, today=today)
        assert classify(policy, today).renewal_state == RenewalState.ACTIVE_FAR

    @pytest.mark.parametrize(
        "status",
        [PolicyStatus.EXPIRED, PolicyStatus.RENEWED, PolicyStatus.CANCELLED],
    )
    @pytest.mark.parametrize("days", [-30, 0, 1, 15, 400])
    def test_non_active_is_always_not_active(
        self, today: date, status: PolicyStatus, days: int
    ) -> None:
        policy = TestDataFactory.create_policy(
            expires_in=days, today=today, policy_status=status
        )

        info = classify(policy, today)

        assert info.renewal_state == RenewalState.NOT_ACTIVE
        assert info.days_until_expiry == days

    def test_cancelled_expiring_tomorrow(self, today: date) -> None:
        info = classify_status(
            PolicyStatus.CANCELLED, today + timedelta(days=1), today
        )
        assert info.renewal_state == RenewalState.NOT_ACTIVE

    def test_classification_does_not_touch_policy(self, today: date) -> None:
        policy = TestDataFactory.create_policy(expires_in=-3, today=today)
        before = policy.model_dump()

        classify(policy, today)

        assert policy.model_dump() == before
        assert policy.policy_status == PolicyStatus.ACTIVE

    def test_result_depends_only_on_inputs(self, today: date) -> None:
        policy = TestDataFactory.create_policy(expires_in=20, today=today)
        assert classify(policy, today) == classify(policy, today)
        assert classify(policy, today + timedelta(days=20)).renewal_state == (
            RenewalState.EXPIRED_BY_DATE
        )

    def test_is_expiring_soon(self, today: date) -> None:
        soon = TestDataFactory.create_policy(expires_in=5, today=today)
        due_today = TestDataFactory.create_policy(expires_in=0, today=today)
        assert is_expiring_soon(soon, today)
        assert not is_expiring_soon(due_today, today)


class TestPresentation:
    """Display tiers and labels layered on the day count."""

    @pytest.mark.parametrize(
        ("days", "tier"),
        [
            (-4, UrgencyTier.URGENT),
            (0, UrgencyTier.URGENT),
            (7, UrgencyTier.URGENT),
            (8, UrgencyTier.WARNING),
            (30, UrgencyTier.WARNING),
            (31, UrgencyTier.SAFE),
        ],
    )
    def test_urgency_tier_boundaries(self, days: int, tier: UrgencyTier) -> None:
        assert urgency_tier(days) == tier

    def test_expiry_label(self) -> None:
        assert expiry_label(12) == "12 days"
        assert expiry_label(0) == "Expired"
        assert expiry_label(-3) == "Expired"

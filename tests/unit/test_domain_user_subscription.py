"""Unit tests for UserSubscription trial math and TrialInfo.

Tests cover:
- Trial expiry boundary (strictly after trial end)
- Trial override applicability
- days_remaining ceiling
- Non-trial subscriptions
"""

from datetime import UTC, datetime, timedelta

import pytest
from uuid_extensions import uuid7

from src.domain.entities import TrialInfo, UserSubscription
from src.domain.enums import SubscriptionStatus

NOW = datetime(2026, 10, 1, 12, 0, tzinfo=UTC)


def create_subscription(
    *,
    is_trial: bool = True,
    trial_ends_at: datetime | None = NOW + timedelta(days=14),
    status: SubscriptionStatus = SubscriptionStatus.TRIAL,
) -> UserSubscription:
    """Create a UserSubscription for testing."""
    return UserSubscription(
        id=uuid7(),
        user_id=uuid7(),
        plan_id=uuid7(),
        plan_name="professional",
        status=status,
        is_trial=is_trial,
        trial_ends_at=trial_ends_at,
        billing_cycle=None,
        billing_reference=None,
        started_at=NOW,
        expires_at=None,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.mark.unit
class TestTrialExpiry:
    """Test trial expiry boundaries."""

    def test_trial_not_expired_at_exact_end(self):
        """A trial is still active at exactly trial_ends_at."""
        subscription = create_subscription(trial_ends_at=NOW)

        assert subscription.is_trial_expired(NOW) is False
        assert subscription.is_trial_active(NOW) is True

    def test_trial_expired_after_end(self):
        """A trial is expired strictly after trial_ends_at."""
        subscription = create_subscription(trial_ends_at=NOW)

        later = NOW + timedelta(seconds=1)
        assert subscription.is_trial_expired(later) is True
        assert subscription.is_trial_active(later) is False

    def test_non_trial_never_expires(self):
        """Active subscriptions are never trial-expired."""
        subscription = create_subscription(
            is_trial=False, trial_ends_at=None, status=SubscriptionStatus.ACTIVE
        )

        assert subscription.is_trial_expired(NOW + timedelta(days=365)) is False
        assert subscription.is_trial_active(NOW) is False


@pytest.mark.unit
class TestTrialInfo:
    """Test trial info computation."""

    def test_fresh_trial_reports_full_duration(self):
        """A 14-day trial reports 14 days at its start."""
        subscription = create_subscription()

        info = subscription.trial_info(NOW)

        assert info.is_on_trial is True
        assert info.days_remaining == 14
        assert info.is_expired is False

    def test_days_remaining_rounds_up(self):
        """36 hours remaining is reported as 2 days."""
        subscription = create_subscription(trial_ends_at=NOW + timedelta(hours=36))

        assert subscription.trial_info(NOW).days_remaining == 2

    def test_expired_trial_reports_zero_days(self):
        """An expired trial reports 0 days and is_expired."""
        subscription = create_subscription(trial_ends_at=NOW - timedelta(hours=1))

        info = subscription.trial_info(NOW)

        assert info.days_remaining == 0
        assert info.is_expired is True

    def test_non_trial_reports_none(self):
        """Non-trial subscriptions report TrialInfo.none()."""
        subscription = create_subscription(
            is_trial=False, trial_ends_at=None, status=SubscriptionStatus.ACTIVE
        )

        assert subscription.trial_info(NOW) == TrialInfo.none()

"""Unit tests for EffectivePlan resolution helpers."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from uuid_extensions import uuid7

from src.domain.entities import SubscriptionPlan
from src.domain.enums import PlanSource
from src.domain.value_objects import EffectivePlan

TRIAL_END = datetime(2026, 10, 15, tzinfo=UTC)


def create_plan(**overrides) -> SubscriptionPlan:
    """Create the professional plan (overridable) for testing."""
    values = {
        "id": uuid7(),
        "name": "professional",
        "display_name": "Professional",
        "price_monthly": Decimal("59.00"),
        "price_annual": Decimal("564.00"),
        "max_domains": 40,
        "max_team_members": 5,
        "check_interval_hours": 1,
        "api_requests_per_month": 5000,
        "sms_alerts_per_month": 100,
        "email_alerts": True,
        "sms_alerts": True,
        "slack_alerts": True,
    }
    values.update(overrides)
    return SubscriptionPlan(**values)


@pytest.mark.unit
class TestEffectivePlan:
    """Test BASE plans and the trial override."""

    def test_from_plan_copies_limits(self):
        effective = EffectivePlan.from_plan(create_plan(), is_unlimited=False)

        assert effective.source is PlanSource.BASE
        assert effective.max_domains == 40
        assert effective.sms_alerts_per_month == 100
        assert effective.is_trial_override is False

    def test_trial_override_replaces_domain_and_sms_caps(self):
        """Trial caps replace quantities only."""
        base = EffectivePlan.from_plan(create_plan(), is_unlimited=False)

        trial = base.with_trial_override(
            max_domains=10, max_sms_alerts=10, trial_ends_at=TRIAL_END
        )

        assert trial.source is PlanSource.TRIAL_OVERRIDE
        assert trial.max_domains == 10
        assert trial.sms_alerts_per_month == 10
        assert trial.trial_ends_at == TRIAL_END

    def test_trial_override_keeps_feature_flags_and_other_limits(self):
        base = EffectivePlan.from_plan(create_plan(), is_unlimited=False)

        trial = base.with_trial_override(
            max_domains=10, max_sms_alerts=10, trial_ends_at=TRIAL_END
        )

        assert trial.slack_alerts is True
        assert trial.sms_alerts is True
        assert trial.max_team_members == 5
        assert trial.api_requests_per_month == 5000
        assert trial.check_interval_hours == 1

    def test_trial_override_is_never_unlimited(self):
        base = EffectivePlan.from_plan(create_plan(name="enterprise"), is_unlimited=True)

        trial = base.with_trial_override(
            max_domains=10, max_sms_alerts=10, trial_ends_at=TRIAL_END
        )

        assert trial.is_unlimited is False

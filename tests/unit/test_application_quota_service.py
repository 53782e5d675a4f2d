"""Unit tests for QuotaService.

Tests cover:
- Boolean checks per dimension (count < limit)
- Not-entitled monthly features (None or 0 limit)
- Unlimited tier
- PlanLimitError details and LIMIT_DENIED audit entries
- Usage report composition

Architecture:
- SubscriptionService and UsageService mocked; the effective plan is the
  only input that matters to the decisions
"""

from unittest.mock import AsyncMock, Mock

import pytest
from uuid_extensions import uuid7

from src.application.services import QuotaService
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities import UsageRecord
from src.domain.enums import AuditAction, PlanSource
from src.domain.errors import PlanLimitError
from src.domain.value_objects import EffectivePlan
from tests.utils.fakes import DEFAULT_NOW, InMemoryAuditAdapter

STARTER = EffectivePlan(
    plan_name="starter",
    display_name="Starter",
    source=PlanSource.BASE,
    is_unlimited=False,
    max_domains=10,
    max_team_members=1,
    check_interval_hours=12,
    api_requests_per_month=None,
    sms_alerts_per_month=0,
    email_alerts=True,
    sms_alerts=False,
    slack_alerts=False,
)

PROFESSIONAL = EffectivePlan(
    plan_name="professional",
    display_name="Professional",
    source=PlanSource.BASE,
    is_unlimited=False,
    max_domains=40,
    max_team_members=5,
    check_interval_hours=1,
    api_requests_per_month=5000,
    sms_alerts_per_month=100,
    email_alerts=True,
    sms_alerts=True,
    slack_alerts=True,
)

ENTERPRISE = EffectivePlan(
    plan_name="enterprise",
    display_name="Enterprise",
    source=PlanSource.BASE,
    is_unlimited=True,
    max_domains=999999,
    max_team_members=999999,
    check_interval_hours=1,
    api_requests_per_month=None,
    sms_alerts_per_month=None,
    email_alerts=True,
    sms_alerts=True,
    slack_alerts=False,
)


def usage_record(*, api: int = 0, sms: int = 0) -> UsageRecord:
    return UsageRecord(
        id=uuid7(),
        user_id=uuid7(),
        month_year="2026-10",
        api_requests=api,
        sms_alerts_sent=sms,
        created_at=DEFAULT_NOW,
        updated_at=DEFAULT_NOW,
    )


class QuotaFixture:
    def __init__(self, plan: EffectivePlan, *, api_used: int = 0, sms_used: int = 0):
        self.subscriptions = AsyncMock()
        self.subscriptions.resolve_effective_plan.return_value = plan
        self.usage = AsyncMock()
        self.usage.get_api_request_count.return_value = api_used
        self.usage.get_sms_alert_count.return_value = sms_used
        self.usage.get_current_usage.return_value = (
            usage_record(api=api_used, sms=sms_used) if api_used or sms_used else None
        )
        self.audit = InMemoryAuditAdapter()
        self.service = QuotaService(
            subscription_service=self.subscriptions,
            usage_service=self.usage,
            audit=self.audit,
            logger=Mock(),
            upgrade_url="https://app.example.com/pricing",
        )


USER_ID = uuid7()


@pytest.mark.unit
class TestQuotaServiceCountDimensions:
    """Test domain and team member limits."""

    @pytest.mark.parametrize(("count", "allowed"), [(0, True), (9, True), (10, False)])
    async def test_can_add_domain(self, count, allowed):
        fx = QuotaFixture(STARTER)

        assert await fx.service.can_add_domain(USER_ID, count) is allowed

    async def test_can_add_team_member(self):
        fx = QuotaFixture(STARTER)

        assert await fx.service.can_add_team_member(USER_ID, 0) is True
        assert await fx.service.can_add_team_member(USER_ID, 1) is False

    async def test_domain_limit_failure_details(self):
        # Arrange
        fx = QuotaFixture(STARTER)

        # Act
        result = await fx.service.check_domain_limit(USER_ID, 10)

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, PlanLimitError)
        assert result.error.code == ErrorCode.DOMAIN_LIMIT_REACHED
        assert result.error.message == (
            "You have reached the maximum of 10 domains for your Starter plan."
        )
        assert result.error.plan_name == "starter"
        assert result.error.upgrade_url == "https://app.example.com/pricing"
        assert result.error.current == 10
        assert result.error.limit == 10
        entry = fx.audit.last(AuditAction.LIMIT_DENIED)
        assert entry.user_id == USER_ID
        assert entry.error_code == ErrorCode.DOMAIN_LIMIT_REACHED.value

    async def test_team_limit_failure_message(self):
        fx = QuotaFixture(PROFESSIONAL)

        result = await fx.service.check_team_limit(USER_ID, 5)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TEAM_LIMIT_REACHED
        assert result.error.message == (
            "You have reached the maximum of 5 team members for your Professional plan."
        )

    async def test_within_limit_succeeds_without_audit(self):
        fx = QuotaFixture(PROFESSIONAL)

        assert await fx.service.check_domain_limit(USER_ID, 39) == Success(value=None)
        assert fx.audit.entries == []


@pytest.mark.unit
class TestQuotaServiceMonthlyDimensions:
    """Test SMS and API monthly limits."""

    async def test_sms_not_available_on_starter(self):
        fx = QuotaFixture(STARTER)

        assert await fx.service.can_send_sms(USER_ID) is False
        result = await fx.service.check_sms_limit(USER_ID)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.FEATURE_NOT_AVAILABLE
        assert result.error.message == "SMS alerts are not available on your Starter plan."

    async def test_api_not_available_on_starter(self):
        fx = QuotaFixture(STARTER)

        result = await fx.service.check_api_limit(USER_ID)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.FEATURE_NOT_AVAILABLE
        assert result.error.message == "API access is not available on your Starter plan."

    async def test_sms_limit_reached(self):
        fx = QuotaFixture(PROFESSIONAL, sms_used=100)

        result = await fx.service.check_sms_limit(USER_ID)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.SMS_LIMIT_REACHED
        assert result.error.message == "You have used all 100 SMS alerts for this month."
        assert result.error.current == 100

    async def test_api_limit_reached(self):
        fx = QuotaFixture(PROFESSIONAL, api_used=5000)

        assert await fx.service.can_make_api_request(USER_ID) is False
        result = await fx.service.check_api_limit(USER_ID)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.API_LIMIT_REACHED
        assert result.error.message == (
            "You have reached the monthly API limit of 5000 requests."
        )

    async def test_within_monthly_limits(self):
        fx = QuotaFixture(PROFESSIONAL, api_used=4999, sms_used=99)

        assert await fx.service.can_make_api_request(USER_ID) is True
        assert await fx.service.can_send_sms(USER_ID) is True


@pytest.mark.unit
class TestQuotaServiceFlagsAndUnlimited:
    """Test Slack access and the unlimited tier."""

    async def test_slack_requires_plan_flag(self):
        assert await QuotaFixture(STARTER).service.can_use_slack_alerts(USER_ID) is False
        assert await QuotaFixture(PROFESSIONAL).service.can_use_slack_alerts(USER_ID) is True

    async def test_slack_denied_message(self):
        result = await QuotaFixture(STARTER).service.check_slack_access(USER_ID)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.FEATURE_NOT_AVAILABLE
        assert result.error.message == "Slack alerts are not available on your Starter plan."

    async def test_unlimited_tier_allows_everything(self):
        fx = QuotaFixture(ENTERPRISE, api_used=10**6, sms_used=10**6)

        assert await fx.service.can_add_domain(USER_ID, 10**7) is True
        assert await fx.service.can_add_team_member(USER_ID, 10**7) is True
        assert await fx.service.can_send_sms(USER_ID) is True
        assert await fx.service.can_make_api_request(USER_ID) is True
        assert await fx.service.can_use_slack_alerts(USER_ID) is True
        assert await fx.service.check_api_limit(USER_ID) == Success(value=None)


@pytest.mark.unit
class TestQuotaServiceUsageLimits:
    """Test the usage report."""

    async def test_report_composes_plan_and_usage(self):
        fx = QuotaFixture(PROFESSIONAL, api_used=120, sms_used=7)

        limits = await fx.service.get_usage_limits(
            USER_ID, current_domain_count=3, current_team_count=2
        )

        assert limits.plan_name == "professional"
        assert limits.source == PlanSource.BASE
        assert (limits.domains.used, limits.domains.limit) == (3, 40)
        assert (limits.team_members.used, limits.team_members.limit) == (2, 5)
        assert (limits.api_requests.used, limits.api_requests.limit) == (120, 5000)
        assert limits.sms_alerts.remaining == 93
        assert limits.features.slack_alerts is True
        assert limits.check_interval_hours == 1

    async def test_report_without_usage_record(self):
        fx = QuotaFixture(STARTER)

        limits = await fx.service.get_usage_limits(USER_ID)

        assert limits.api_requests.used == 0
        assert limits.api_requests.limit is None
        assert limits.api_requests.remaining == 0
        assert limits.sms_alerts.unlimited is False

    async def test_report_unlimited(self):
        fx = QuotaFixture(ENTERPRISE)

        limits = await fx.service.get_usage_limits(USER_ID, current_domain_count=50)

        assert limits.domains.unlimited is True
        assert limits.domains.limit is None
        assert limits.domains.remaining is None
        assert limits.features.slack_alerts is True

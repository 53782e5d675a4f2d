"""Plan limit error type.

Returned by entitlement checks when the effective plan does not allow an
action: the feature is not part of the plan (FEATURE_NOT_AVAILABLE) or a
quantity is exhausted (DOMAIN/TEAM/SMS/API_LIMIT_REACHED).

Usage:
    from src.domain.errors import PlanLimitError

    return Failure(error=PlanLimitError(
        code=ErrorCode.DOMAIN_LIMIT_REACHED,
        message="You have reached the maximum of 10 domains for your starter plan.",
        current=10,
        limit=10,
        plan_name="starter",
        upgrade_url="/pricing",
    ))
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class PlanLimitError(DomainError):
    """Entitlement denied by the effective plan.

    Attributes:
        current: Current count in the limited dimension (None for flags).
        limit: Limit of the effective plan (None when not entitled).
        plan_name: Name of the plan the limit comes from.
        upgrade_url: Where the client can upgrade.
    """

    plan_name: str
    upgrade_url: str
    current: int | None = None
    limit: int | None = None

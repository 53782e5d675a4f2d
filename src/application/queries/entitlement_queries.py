"""Entitlement queries (CQRS read operations).

Quota checks are reads: they never count usage. Domain and team counts are
owned by the calling application and passed in.

Note:
    Every entitlement query resolves the effective plan first, which applies
    a due trial expiry. That downgrade is the only write a query can cause.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class CheckDomainLimit:
    """Can the user add one more domain?

    Attributes:
        user_id: User identifier.
        current_count: Domains the user currently owns.
    """

    user_id: UUID
    current_count: int


@dataclass(frozen=True, kw_only=True)
class CheckTeamLimit:
    """Can the user add one more team member?

    Attributes:
        user_id: User identifier.
        current_count: Team members the user currently has.
    """

    user_id: UUID
    current_count: int


@dataclass(frozen=True, kw_only=True)
class CheckSmsLimit:
    """Can the user send one more SMS alert this month?"""

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class CheckApiLimit:
    """Can the user make one more API request this month?"""

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class CheckSlackAccess:
    """Does the user's plan include Slack alerts?"""

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class GetUsageLimits:
    """Get the usage/limit report for a user.

    Attributes:
        user_id: User identifier.
        current_domain_count: Domains the user currently owns.
        current_team_count: Team members the user currently has.

    Example:
        >>> query = GetUsageLimits(user_id=user_id, current_domain_count=3)
        >>> result = await handler.handle(query)
        >>> result.value.domains.remaining
        7
    """

    user_id: UUID
    current_domain_count: int = 0
    current_team_count: int = 0


@dataclass(frozen=True, kw_only=True)
class GetUsageHistory:
    """Get monthly usage records, newest first.

    Attributes:
        user_id: User identifier.
        months: Maximum number of months returned.
    """

    user_id: UUID
    months: int = 6

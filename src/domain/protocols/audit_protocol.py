"""Audit trail protocol (port).

The engine emits one audit entry per significant transition (token issue,
rotation, reuse detected, limit denied, trial assigned, trial expired).
Entries are tagged with the application name so several applications can
share one audit table.

Following hexagonal architecture:
- Domain defines the PORT (this protocol)
- Infrastructure provides ADAPTERS (DatabaseAuditAdapter)
- Application services use the protocol and ignore failures (after the
  adapter has logged them): business flows never depend on auditing.

Usage:
    result = await audit.record(
        action=AuditAction.TRIAL_ASSIGNED,
        message="14-day trial assigned",
        user_id=user_id,
        user_email=email,
        metadata={"plan": "professional"},
    )
"""

from typing import Any, Protocol
from uuid import UUID

from src.core.result import Result
from src.domain.enums import AuditAction, LogLevel
from src.domain.errors import AuditError


class AuditProtocol(Protocol):
    """Protocol for audit trail sinks.

    Implementations:
        - DatabaseAuditAdapter: ``audit_logs`` table (own session per entry)
        - InMemoryAuditAdapter: list-backed fake for tests

    Error Handling:
        Methods return Result types. NEVER raise for sink failures - wrap
        them in Failure(AuditError(...)) instead.
    """

    async def record(
        self,
        *,
        action: AuditAction,
        message: str,
        level: LogLevel = LogLevel.INFO,
        user_id: UUID | None = None,
        user_email: str | None = None,
        error_code: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Result[None, AuditError]:
        """Record one immutable audit entry.

        Args:
            action: What happened.
            message: Human-readable description.
            level: Severity (info, warn, error, debug).
            user_id: Identity reference, when known.
            user_email: Email reference, when known.
            error_code: ErrorCode value for failures/denials.
            metadata: Action-specific context (JSON-serializable).

        Returns:
            Success(None) when recorded, Failure(AuditError) otherwise.
        """
        ...

"""Database implementation of AuditProtocol.

Writes one row per entry to the ``audit_logs`` table and mirrors the entry
to the structured logger.

Each entry is written in its own short session, so an audit failure can
never roll back (or be rolled back by) the business operation being
recorded. Failures are logged and returned as Failure(AuditError); callers
ignore them.

Usage:
    adapter = DatabaseAuditAdapter(database=db, logger=logger, app_name="app")

    await adapter.record(
        action=AuditAction.REFRESH_TOKEN_REUSE_DETECTED,
        message="Revoked refresh token presented again",
        level=LogLevel.WARN,
        user_id=user_id,
        metadata={"revoked_count": 3},
    )
"""

from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction, LogLevel
from src.domain.errors import AuditError
from src.domain.protocols import LoggerProtocol
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.models import AuditLog


class DatabaseAuditAdapter:
    """Append-only audit sink backed by the engine database.

    Attributes:
        database: Database manager used to open a dedicated session per entry.
        logger: Structured logger; every entry is mirrored there.
        app_name: Tenant tag written on every row.
    """

    def __init__(
        self,
        *,
        database: Database,
        logger: LoggerProtocol,
        app_name: str,
    ) -> None:
        self.database = database
        self.logger = logger
        self.app_name = app_name

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

        Returns:
            Success(None) if the row was committed, Failure(AuditError) if
            the database rejected it.
        """
        self._mirror(action, message, level, user_id, user_email, error_code)

        try:
            async with self.database.get_session() as session:
                session.add(
                    AuditLog(
                        app_name=self.app_name,
                        log_level=level.value,
                        action=action.value,
                        message=message,
                        user_id=user_id,
                        user_email=user_email,
                        error_code=error_code,
                        metadata_=metadata,
                    )
                )
            return Success(value=None)

        except SQLAlchemyError as e:
            self.logger.error(
                "audit_record_failed",
                error=e,
                action=action.value,
                user_id=str(user_id) if user_id else None,
            )
            return Failure(
                error=AuditError(
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    message=f"Failed to record audit log: {e}",
                    details={
                        "action": action.value,
                        "error_type": type(e).__name__,
                    },
                )
            )

    def _mirror(
        self,
        action: AuditAction,
        message: str,
        level: LogLevel,
        user_id: UUID | None,
        user_email: str | None,
        error_code: str | None,
    ) -> None:
        context: dict[str, Any] = {
            "audit_action": action.value,
            "app_name": self.app_name,
        }
        if user_id is not None:
            context["user_id"] = str(user_id)
        if user_email is not None:
            context["user_email"] = user_email
        if error_code is not None:
            context["error_code"] = error_code

        match level:
            case LogLevel.DEBUG:
                self.logger.debug(message, **context)
            case LogLevel.WARN:
                self.logger.warning(message, **context)
            case LogLevel.ERROR:
                self.logger.error(message, **context)
            case _:
                self.logger.info(message, **context)

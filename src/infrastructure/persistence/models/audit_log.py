"""Audit log database model.

Append-only: the engine only inserts rows. Entries are tagged with the
application name so several applications can share one table.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Index, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel


class AuditLog(BaseModel):
    """Audit log model (immutable, no updated_at).

    Fields:
        id: UUID primary key (from BaseModel)
        created_at: Timestamp when logged (from BaseModel)
        app_name: Application that produced the entry
        log_level: info, warn, error, debug
        action: AuditAction value
        message: Human-readable description
        user_id: Identity reference (no foreign key; entries outlive users)
        user_email: Email reference
        error_code: ErrorCode value for failures and denials
        metadata_: Action-specific context (JSON; JSONB on PostgreSQL)

    Indexes:
        - idx_audit_user_action: (user_id, action)
        - idx_audit_app_created: (app_name, created_at)
    """

    __tablename__ = "audit_logs"

    app_name: Mapped[str] = mapped_column(String(100), nullable=False)
    log_level: Mapped[str] = mapped_column(String(10), nullable=False)
    action: Mapped[str] = mapped_column(String(100), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    user_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    error_code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    metadata_: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata",
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
    )

    __table_args__ = (
        Index("idx_audit_user_action", "user_id", "action"),
        Index("idx_audit_app_created", "app_name", "created_at"),
    )

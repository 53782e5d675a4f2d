"""Audit infrastructure implementations."""

from src.infrastructure.audit.database_audit_adapter import DatabaseAuditAdapter

__all__ = ["DatabaseAuditAdapter"]

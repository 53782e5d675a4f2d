"""Audit entry severity levels."""

from enum import Enum


class LogLevel(str, Enum):
    """Severity stored on audit entries (``audit_logs.log_level``)."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

"""Core shared kernel.

This module provides foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error classes for domain-level error handling
- Settings and internal constants

The core module has NO dependencies on other application layers
(the dependency container under ``src.core.container`` is the composition root
and is imported explicitly).
"""

from src.core.enums import ErrorCode
from src.core.errors import (
    AuthenticationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from src.core.result import Failure, Result, Success

__all__ = [
    "AuthenticationError",
    "ConflictError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "NotFoundError",
    "Result",
    "Success",
    "ValidationError",
]

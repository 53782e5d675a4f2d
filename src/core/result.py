"""Result types for railway-oriented programming.

Every caller-facing operation of the engine returns a Result instead of
raising for expected outcomes (wrong password, spent token, quota reached).
This makes error handling explicit and testable.

Usage:
    result = await handler.handle(LoginUser(email=email, password=password))
    match result:
        case Success(value=login):
            return login.access_token
        case Failure(error=error):
            return error.code
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]

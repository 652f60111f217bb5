"""Result types for railway-oriented programming.

Handlers return a Result instead of raising for expected failures, so every
failure path (wrong password, expired refresh token, duplicate email) is
visible in the signature and easy to test.

Usage:
    async def handle(cmd: LoginUser) -> Result[LoginResponse, AuthError]:
        ...

    match await handler.handle(cmd):
        case Success(value=response):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: The produced value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: Why the operation failed.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]

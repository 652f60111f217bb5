"""Tagged error type used across all layers.

AuthError is plain data (not an Exception). It flows through handlers inside
Failure results and is converted to the wire envelope in exactly one place,
the presentation error builder, which matches on ``kind``.

Usage:
    from storefront_auth.core.errors import AuthError
    from storefront_auth.core.enums import ErrorKind

    return Failure(
        error=AuthError(
            kind=ErrorKind.CREDENTIALS_INVALID,
            message="Invalid email or password",
        )
    )
"""

from dataclasses import dataclass

from storefront_auth.core.enums import ErrorKind


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthError:
    """Expected (operational) failure.

    Attributes:
        kind: Error tag; selects status and default wire code.
        message: User-safe, human-readable message.
        details: Optional user-safe context (e.g. field -> message).
        code: Wire code override (e.g. DUPLICATE_EMAIL for a CONFLICT).
    """

    kind: ErrorKind
    message: str
    details: dict[str, str] | None = None
    code: str | None = None

    @property
    def wire_code(self) -> str:
        """Machine-readable code sent to clients."""
        return self.code or self.kind.value

    def __str__(self) -> str:
        return f"{self.wire_code}: {self.message}"


class AuthErrorException(Exception):
    """Carrier used where FastAPI requires raising (dependencies).

    Route dependencies cannot return a Result, so they raise this wrapper;
    the registered exception handler unwraps it into the same envelope a
    handler Failure would produce.
    """

    def __init__(self, error: AuthError) -> None:
        super().__init__(str(error))
        self.error = error

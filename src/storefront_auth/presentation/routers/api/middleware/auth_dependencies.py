"""JWT authentication dependencies.

Two authentication policies, plus optional auth and a role gate:

- ``get_current_user`` (claims-only): verifies the access token and trusts
  its claims. No database round-trip; a role change takes effect only
  when the token is re-issued.
- ``get_current_user_fresh`` (claims + fresh check): additionally reloads
  the user and rejects blocked (403) or inactive (401) users.
- ``get_current_user_optional``: same extraction and verification, but any
  failure yields ``None`` (anonymous).
- ``require_any_role(*roles)``: 403 unless the caller's role is allowed.

Token extraction order:
    1. ``token`` cookie
    2. ``Authorization: Bearer <token>``
    3. ``Authorization: <token>`` (raw value, legacy clients)

Usage:
    @router.get("/protected")
    async def protected_route(current_user: AuthenticatedUser):
        return {"user_id": str(current_user.user_id)}

    @router.get("/optional")
    async def optional_route(current_user: OptionalUser):
        if current_user:
            return {"user_id": str(current_user.user_id)}
        return {"message": "anonymous"}
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request

from storefront_auth.core.container import get_token_service, get_user_repository
from storefront_auth.core.enums import ErrorKind
from storefront_auth.core.errors import AuthError, AuthErrorException
from storefront_auth.core.result import Failure, Result, Success
from storefront_auth.domain.entities import User
from storefront_auth.domain.enums import UserRole
from storefront_auth.domain.protocols import TokenServiceProtocol, UserRepository

ACCESS_TOKEN_COOKIE = "token"


class AuthGateError:
    """Access gate messages (user-safe)."""

    TOKEN_MISSING = "Access token is required"
    USER_NOT_FOUND = "Access token is invalid"
    ACCOUNT_LOCKED = "Account is locked"
    USER_BLOCKED = "Account is blocked"
    ROLE_REQUIRED = "Insufficient role"


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentUser:
    """Authenticated identity decoded from the access token.

    Attributes:
        user_id: User id (``userId`` claim, or legacy ``id``).
        email: Email at token issue time.
        role: Role at token issue time.
        account_id: Account used to log in (None for legacy tokens).
    """

    user_id: UUID
    email: str
    role: str
    account_id: UUID | None = None


def extract_access_token(request: Request) -> str | None:
    """Return the access token from cookie or Authorization header."""
    cookie_token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if cookie_token:
        return cookie_token

    header = (request.headers.get("Authorization") or "").strip()
    if not header:
        return None
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer":
        return credentials.strip() or None
    return header


def _authenticate(
    request: Request, token_service: TokenServiceProtocol
) -> Result[CurrentUser, AuthError]:
    token = extract_access_token(request)
    if token is None:
        return Failure(
            error=AuthError(
                kind=ErrorKind.TOKEN_MISSING,
                message=AuthGateError.TOKEN_MISSING,
            )
        )

    match token_service.decode_access_token(token):
        case Failure(error=error):
            return Failure(error=error)
        case Success(value=claims):
            user = CurrentUser(
                user_id=claims.user_id,
                email=claims.email,
                role=claims.role,
                account_id=claims.account_id,
            )
            request.state.user = user
            return Success(value=user)


async def get_current_user(
    request: Request,
    token_service: Annotated[TokenServiceProtocol, Depends(get_token_service)],
) -> CurrentUser:
    """Get current authenticated user from the access token (claims-only).

    Raises:
        AuthErrorException: TOKEN_MISSING, TOKEN_EXPIRED or TOKEN_INVALID
            (all 401).
    """
    match _authenticate(request, token_service):
        case Failure(error=error):
            raise AuthErrorException(error)
        case Success(value=user):
            return user


async def get_current_user_optional(
    request: Request,
    token_service: Annotated[TokenServiceProtocol, Depends(get_token_service)],
) -> CurrentUser | None:
    """Get current user if authenticated, None otherwise.

    Never raises for missing or bad tokens.
    """
    match _authenticate(request, token_service):
        case Success(value=user):
            return user
        case _:
            return None


async def get_current_user_fresh(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
) -> User:
    """Verify the token, then reload the user from the database.

    Catches blocks and deactivations made after the token was issued.

    Raises:
        AuthErrorException: TOKEN_INVALID (401) if the user no longer
            exists, ACCOUNT_LOCKED (401) if inactive, FORBIDDEN (403) if
            blocked.
    """
    user = await user_repo.find_by_id(current_user.user_id)
    if user is None:
        raise AuthErrorException(
            AuthError(kind=ErrorKind.TOKEN_INVALID, message=AuthGateError.USER_NOT_FOUND)
        )
    if user.is_blocked:
        raise AuthErrorException(
            AuthError(kind=ErrorKind.FORBIDDEN, message=AuthGateError.USER_BLOCKED)
        )
    if not user.is_active:
        raise AuthErrorException(
            AuthError(kind=ErrorKind.ACCOUNT_LOCKED, message=AuthGateError.ACCOUNT_LOCKED)
        )
    return user


def require_any_role(
    *allowed_roles: UserRole | str,
) -> Callable[..., Awaitable[CurrentUser]]:
    """Create a dependency that requires any of the specified roles.

    Runs after the access gate, so an unauthenticated caller gets the
    gate's 401 before any role check.

    Usage:
        @router.post("/sessions/cleanup")
        async def cleanup(
            current_user: CurrentUser = Depends(require_any_role(UserRole.ADMIN)),
        ):
            ...

    Raises:
        AuthErrorException: FORBIDDEN (403) if the role is not allowed.
    """
    allowed = {
        role.value if isinstance(role, UserRole) else role for role in allowed_roles
    }

    async def role_checker(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role not in allowed:
            raise AuthErrorException(
                AuthError(
                    kind=ErrorKind.FORBIDDEN,
                    message=AuthGateError.ROLE_REQUIRED,
                    details={"requiredRoles": ", ".join(sorted(allowed))},
                )
            )
        return current_user

    return role_checker


# Type aliases for cleaner route signatures
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
OptionalUser = Annotated[CurrentUser | None, Depends(get_current_user_optional)]
FreshUser = Annotated[User, Depends(get_current_user_fresh)]

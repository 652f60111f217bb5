"""Session queries (CQRS read operations)."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class ListUserSessions:
    """List a user's active, unexpired sessions.

    Attributes:
        user_id: User identifier (from a verified access token).
        current_refresh_token: Caller's refresh token, used to flag the
            session making the request. The caller only holds the token, not
            the session id, so matching is by value.

    Example:
        >>> query = ListUserSessions(
        ...     user_id=current_user.user_id,
        ...     current_refresh_token=request.cookies.get("refreshToken"),
        ... )
        >>> result = await handler.handle(query)
    """

    user_id: UUID
    current_refresh_token: str | None = None

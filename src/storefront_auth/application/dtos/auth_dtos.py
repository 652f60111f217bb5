"""Authentication DTOs (Data Transfer Objects).

Response/result dataclasses returned by handlers. They carry domain
entities or plain values; the presentation layer decides which fields
reach the wire (password hashes and refresh tokens never do in the body).

Reference:
    - docs/architecture/cqrs-pattern.md (DTOs section)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from storefront_auth.domain.entities import Account, User


@dataclass(frozen=True, kw_only=True)
class RegistrationResult:
    """Result of successful registration.

    Attributes:
        user: Newly created profile.
        account: Newly created email account (hash redacted on output).
    """

    user: User
    account: Account


@dataclass(frozen=True, kw_only=True)
class LoginResult:
    """Result of successful login.

    Attributes:
        user: Authenticated profile.
        session_id: Session opened by this login.
        access_token: Short-lived JWT (returned in the response body).
        refresh_token: Long-lived JWT (delivered only as an HTTP-only cookie).
        refresh_ttl: Lifetime of the session and of the refresh cookie.
    """

    user: User
    session_id: UUID
    access_token: str
    refresh_token: str
    refresh_ttl: timedelta


@dataclass(frozen=True, kw_only=True)
class RefreshResult:
    """Result of a token refresh.

    The refresh token is returned unchanged (no rotation).
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, kw_only=True)
class SessionView:
    """Session summary for the session management list.

    Attributes:
        id: Session identifier (used to revoke it).
        device_type: Client-reported device type.
        ip_address: Client IP at login.
        created_at: Login time.
        last_activity_at: Last login/refresh time.
        expires_at: Hard expiry.
        is_current: True if this is the caller's own session.
    """

    id: UUID
    device_type: str | None
    ip_address: str | None
    created_at: datetime
    last_activity_at: datetime
    expires_at: datetime
    is_current: bool = False

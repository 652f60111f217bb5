"""Authentication commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments.

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic and return Result types
- Registration and login fields may be None: presence is a business rule
  checked by the handler so every missing field is reported together
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class DeviceInfo:
    """Client metadata captured at login.

    Attributes:
        device_type: Client-reported device type ("unknown" if absent).
        ip_address: Client IP address.
        user_agent: Raw User-Agent header.
    """

    device_type: str = "unknown"
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Register a new user with an email account.

    Attributes:
        email: Email address (becomes the account identifier).
        password: Plaintext password (hashed before storage).
        full_name: Display name.
        phone: Contact phone.
        role: Optional role, defaults to customer.

    Example:
        >>> command = RegisterUser(
        ...     email="a@x.com",
        ...     password="Secret123",
        ...     full_name="Alice",
        ...     phone="0900000000",
        ... )
        >>> result = await handler.handle(command)
    """

    email: str | None
    password: str | None
    full_name: str | None
    phone: str | None
    role: str | None = None


@dataclass(frozen=True, kw_only=True)
class LoginUser:
    """Authenticate with email/password and open a session.

    Attributes:
        email: Login identifier.
        password: Plaintext password.
        device: Client metadata stored on the session.
    """

    email: str | None
    password: str | None
    device: DeviceInfo = DeviceInfo()


@dataclass(frozen=True, kw_only=True)
class RefreshAccessToken:
    """Exchange a refresh token for a new access token.

    Attributes:
        refresh_token: Refresh token from the cookie (None if absent).
    """

    refresh_token: str | None


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """End the session identified by a refresh token.

    Attributes:
        refresh_token: Refresh token from the cookie (None if absent).
    """

    refresh_token: str | None


@dataclass(frozen=True, kw_only=True)
class LogoutAllDevices:
    """End every active session of the authenticated user.

    Attributes:
        user_id: Caller identity from a verified access token.
    """

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class LogoutSession:
    """End one session owned by the authenticated user.

    Attributes:
        session_id: Session to end.
        user_id: Caller identity from a verified access token.
    """

    session_id: UUID
    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class ReapSessions:
    """Delete expired and long-inactive sessions.

    Attributes:
        retention_days: Inactive sessions idle longer than this are deleted.
    """

    retention_days: int = 30

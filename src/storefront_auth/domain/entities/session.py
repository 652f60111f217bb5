"""Session domain entity for multi-device login tracking.

Pure business logic, no framework dependencies.

A Session binds one refresh token to one device/login. Logging out flips
``is_active`` (logical delete); the reaper job removes rows physically
once they have expired or have been inactive long enough.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass(slots=True, kw_only=True)
class Session:
    """Authenticated device/login instance.

    Business Rules:
        - Usable only while ``is_active`` AND ``now < expires_at``
        - ``session_token`` and ``last_activity_at`` change on every refresh
        - ``refresh_token`` never changes (no rotation)

    Attributes:
        id: Unique session identifier.
        user_id: Owning user (access-control owner).
        account_id: Account used to log in.
        session_token: Current access token value.
        refresh_token: Long-lived token; lookup key for refresh/logout.
        device_type: Client-reported device type.
        ip_address: Client IP at login.
        user_agent: Client user agent at login.
        is_active: False once logged out.
        expires_at: Hard expiry (login + refresh lifetime).
        created_at: Login time.
        last_activity_at: Last login/refresh time.

    Example:
        >>> session = Session(
        ...     id=uuid7(),
        ...     user_id=user.id,
        ...     account_id=account.id,
        ...     session_token=access,
        ...     refresh_token=refresh,
        ...     expires_at=datetime.now(UTC) + timedelta(days=7),
        ... )
        >>> session.is_valid()
        True
    """

    id: UUID
    user_id: UUID
    account_id: UUID
    session_token: str
    refresh_token: str
    expires_at: datetime
    device_type: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_activity_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def is_valid(self, now: datetime | None = None) -> bool:
        """Check if the session can still be used.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            True if active and not yet expired.
        """
        now = now or datetime.now(UTC)
        return self.is_active and now < self.expires_at

    def deactivate(self, now: datetime | None = None) -> None:
        """Mark the session logged out; activity time records the logout."""
        self.is_active = False
        self.last_activity_at = now or datetime.now(UTC)

    def record_refresh(self, access_token: str, now: datetime | None = None) -> None:
        """Store a newly minted access token and bump activity."""
        self.session_token = access_token
        self.last_activity_at = now or datetime.now(UTC)

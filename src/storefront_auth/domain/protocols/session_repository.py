"""Session repository protocol for persistence abstraction.

Domain defines the port; infrastructure implements the adapter. All
"active" queries apply the same rule: ``is_active AND expires_at > now``.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from storefront_auth.domain.entities import Session


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionWithOwner:
    """Active session joined with the owner's current profile fields.

    Attributes:
        session: The session row.
        email: Owner's email from the join.
        role: Owner's role from the join.
        user_is_active: Owner's login gate.
    """

    session: Session
    email: str
    role: str
    user_is_active: bool


class SessionRepository(Protocol):
    """Session repository protocol (port)."""

    async def add(self, session: Session) -> None:
        """Persist a newly created session."""
        ...

    async def find_active_by_refresh_token(
        self, refresh_token: str, now: datetime
    ) -> SessionWithOwner | None:
        """Find the active, unexpired session holding ``refresh_token``."""
        ...

    async def record_refresh(
        self, session_id: UUID, access_token: str, now: datetime
    ) -> bool:
        """Store the new access token and bump ``last_activity_at``.

        Returns:
            False if the session is missing or no longer active.
        """
        ...

    # Every deactivation also sets last_activity_at to the logout time
    async def deactivate_by_refresh_token(self, refresh_token: str) -> bool:
        """Deactivate the active session holding ``refresh_token``.

        Returns:
            True if a row changed.
        """
        ...

    async def deactivate_all_for_user(self, user_id: UUID) -> int:
        """Deactivate every active session of a user; return the count."""
        ...

    async def deactivate_for_user(self, session_id: UUID, user_id: UUID) -> bool:
        """Deactivate one session only if ``user_id`` owns it."""
        ...

    async def list_active_for_user(
        self, user_id: UUID, now: datetime
    ) -> list[Session]:
        """Active, unexpired sessions, most recent activity first."""
        ...

    async def delete_stale(self, now: datetime, inactive_before: datetime) -> int:
        """Physically delete expired sessions and long-inactive ones.

        Deletes rows where ``expires_at < now`` OR
        (``NOT is_active`` AND ``last_activity_at < inactive_before``).
        """
        ...

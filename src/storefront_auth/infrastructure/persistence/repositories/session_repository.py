"""SessionRepository - SQLAlchemy implementation of the SessionRepository protocol.

Adapter for hexagonal architecture. Maps between Session domain entities
and SessionModel rows.

This repository handles:
- Session creation at login
- Refresh lookup (active + unexpired, joined with the owner)
- Logical logout (single, by id with ownership, all devices)
- Physical cleanup for the reaper job
"""

from datetime import datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from storefront_auth.domain.entities import Session
from storefront_auth.domain.protocols import SessionWithOwner
from storefront_auth.infrastructure.persistence.base import utc_now
from storefront_auth.infrastructure.persistence.models import SessionModel, UserModel
from storefront_auth.infrastructure.persistence.repositories.mappers import (
    session_to_domain,
    session_to_model,
)


class SessionRepository:
    """SQLAlchemy implementation of SessionRepository protocol.

    Bulk writes use UPDATE/DELETE statements and report affected row
    counts, so "nothing to do" is distinguishable from success.

    Example:
        >>> async with database.get_session() as db_session:
        ...     repo = SessionRepository(db_session)
        ...     sessions = await repo.list_active_for_user(user_id, now)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def add(self, session: Session) -> None:
        """Persist a newly created session.

        Args:
            session: Session entity to insert.
        """
        self._session.add(session_to_model(session))
        await self._session.commit()

    async def find_active_by_refresh_token(
        self, refresh_token: str, now: datetime
    ) -> SessionWithOwner | None:
        """Find the usable session holding ``refresh_token``.

        Requires ``is_active`` and ``expires_at > now``. The owner's email,
        role and active flag come from the same join.

        Returns:
            SessionWithOwner if found, None otherwise.
        """
        stmt = (
            select(SessionModel, UserModel.email, UserModel.role, UserModel.is_active)
            .join(UserModel, UserModel.id == SessionModel.user_id)
            .where(
                and_(
                    SessionModel.refresh_token == refresh_token,
                    SessionModel.is_active.is_(True),
                    SessionModel.expires_at > now,
                )
            )
        )
        result = await self._session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        model, email, role, user_is_active = row
        return SessionWithOwner(
            session=session_to_domain(model),
            email=email,
            role=role,
            user_is_active=user_is_active,
        )

    async def record_refresh(
        self, session_id: UUID, access_token: str, now: datetime
    ) -> bool:
        """Store the newly minted access token and bump activity.

        Returns:
            True if updated, False if the session is missing or was
            deactivated after it was looked up.
        """
        stmt = (
            update(SessionModel)
            .where(
                and_(
                    SessionModel.id == session_id,
                    SessionModel.is_active.is_(True),
                )
            )
            .values(session_token=access_token, last_activity_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        return (cast(Any, result).rowcount or 0) > 0

    async def deactivate_by_refresh_token(self, refresh_token: str) -> bool:
        """Deactivate the active session holding ``refresh_token``.

        Returns:
            True if a session was deactivated, False if none was active.
        """
        stmt = (
            update(SessionModel)
            .where(
                and_(
                    SessionModel.refresh_token == refresh_token,
                    SessionModel.is_active.is_(True),
                )
            )
            .values(is_active=False, last_activity_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        return (cast(Any, result).rowcount or 0) > 0

    async def deactivate_all_for_user(self, user_id: UUID) -> int:
        """Deactivate every active session of a user (all devices).

        Returns:
            Number of sessions deactivated.
        """
        stmt = (
            update(SessionModel)
            .where(
                and_(
                    SessionModel.user_id == user_id,
                    SessionModel.is_active.is_(True),
                )
            )
            .values(is_active=False, last_activity_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        return cast(Any, result).rowcount or 0

    async def deactivate_for_user(self, session_id: UUID, user_id: UUID) -> bool:
        """Deactivate one session, only if ``user_id`` owns it.

        Ownership is part of the WHERE clause, so a session belonging to
        someone else is indistinguishable from a missing one.

        Returns:
            True if deactivated, False if absent, not owned or already inactive.
        """
        stmt = (
            update(SessionModel)
            .where(
                and_(
                    SessionModel.id == session_id,
                    SessionModel.user_id == user_id,
                    SessionModel.is_active.is_(True),
                )
            )
            .values(is_active=False, last_activity_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        return (cast(Any, result).rowcount or 0) > 0

    async def list_active_for_user(
        self, user_id: UUID, now: datetime
    ) -> list[Session]:
        """Active, unexpired sessions for a user.

        Returns:
            Sessions ordered by last_activity_at descending (most recent first).
        """
        stmt = (
            select(SessionModel)
            .where(
                and_(
                    SessionModel.user_id == user_id,
                    SessionModel.is_active.is_(True),
                    SessionModel.expires_at > now,
                )
            )
            .order_by(SessionModel.last_activity_at.desc())
        )
        result = await self._session.execute(stmt)
        return [session_to_domain(model) for model in result.scalars().all()]

    async def delete_stale(self, now: datetime, inactive_before: datetime) -> int:
        """Physically delete expired and long-inactive sessions.

        Deletes rows where:
        - expires_at < now, OR
        - is_active is False AND last_activity_at < inactive_before

        Deactivation stamps ``last_activity_at``, so the retention window
        counts from logout, not from the last refresh.

        Returns:
            Number of sessions deleted.
        """
        stmt = (
            delete(SessionModel)
            .where(
                or_(
                    SessionModel.expires_at < now,
                    and_(
                        SessionModel.is_active.is_(False),
                        SessionModel.last_activity_at < inactive_before,
                    ),
                )
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        return cast(Any, result).rowcount or 0

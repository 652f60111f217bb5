"""ListUserSessions query handler."""

from datetime import UTC, datetime

from storefront_auth.application.dtos import SessionView
from storefront_auth.application.queries.session_queries import ListUserSessions
from storefront_auth.core.errors import AuthError
from storefront_auth.core.result import Result, Success
from storefront_auth.domain.protocols import SessionRepository


class ListSessionsHandler:
    """Handler for ListUserSessions query.

    Returns active, unexpired sessions (most recent activity first), each
    flagged ``is_current`` when its refresh token equals the caller's.
    """

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    async def handle(self, query: ListUserSessions) -> Result[list[SessionView], AuthError]:
        sessions = await self._session_repo.list_active_for_user(
            query.user_id, datetime.now(UTC)
        )
        return Success(
            value=[
                SessionView(
                    id=session.id,
                    device_type=session.device_type,
                    ip_address=session.ip_address,
                    created_at=session.created_at,
                    last_activity_at=session.last_activity_at,
                    expires_at=session.expires_at,
                    is_current=(
                        query.current_refresh_token is not None
                        and session.refresh_token == query.current_refresh_token
                    ),
                )
                for session in sessions
            ]
        )

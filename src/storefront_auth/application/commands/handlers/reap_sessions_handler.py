"""Session reaper handler.

Physically deletes sessions that can never be used again:
- expired (``expires_at < now``), or
- logged out and idle for longer than the retention window.
"""

from datetime import UTC, datetime, timedelta

from storefront_auth.application.commands.auth_commands import ReapSessions
from storefront_auth.core.errors import AuthError
from storefront_auth.core.result import Result, Success
from storefront_auth.domain.protocols import LoggerProtocol, SessionRepository


class ReapSessionsHandler:
    """Handler for the session cleanup command."""

    def __init__(
        self,
        session_repo: SessionRepository,
        logger: LoggerProtocol,
    ) -> None:
        self._session_repo = session_repo
        self._logger = logger

    async def handle(self, cmd: ReapSessions) -> Result[int, AuthError]:
        """Returns Success(count) of deleted sessions."""
        now = datetime.now(UTC)
        deleted = await self._session_repo.delete_stale(
            now=now,
            inactive_before=now - timedelta(days=cmd.retention_days),
        )
        self._logger.info("sessions_reaped", deleted=deleted)
        return Success(value=deleted)

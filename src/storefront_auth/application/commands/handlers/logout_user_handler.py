"""Logout handlers.

- LogoutUserHandler: end the session holding a refresh token (idempotent)
- LogoutAllDevicesHandler: end every active session of the caller
- LogoutSessionHandler: end one session, only if the caller owns it

Logout is a logical delete (``is_active = False``); the reaper removes rows.
"""

from storefront_auth.application.commands.auth_commands import (
    LogoutAllDevices,
    LogoutSession,
    LogoutUser,
)
from storefront_auth.core.enums import ErrorKind
from storefront_auth.core.errors import AuthError
from storefront_auth.core.result import Failure, Result, Success
from storefront_auth.domain.protocols import LoggerProtocol, SessionRepository


class LogoutError:
    """Logout-specific errors."""

    SESSION_NOT_FOUND = "Session not found"


class LogoutUserHandler:
    """Handler for single-session logout.

    Absent or already-revoked tokens are not errors: calling logout twice
    succeeds both times, the second reporting that nothing changed.
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        logger: LoggerProtocol,
    ) -> None:
        self._session_repo = session_repo
        self._logger = logger

    async def handle(self, cmd: LogoutUser) -> Result[bool, AuthError]:
        """Handle logout command.

        Returns:
            Success(True) if a session was deactivated, Success(False) if
            there was no active session for the token.
        """
        if not cmd.refresh_token:
            return Success(value=False)

        deactivated = await self._session_repo.deactivate_by_refresh_token(
            cmd.refresh_token
        )
        self._logger.info("session_logged_out", deactivated=deactivated)
        return Success(value=deactivated)


class LogoutAllDevicesHandler:
    """Handler for logout from every device."""

    def __init__(
        self,
        session_repo: SessionRepository,
        logger: LoggerProtocol,
    ) -> None:
        self._session_repo = session_repo
        self._logger = logger

    async def handle(self, cmd: LogoutAllDevices) -> Result[int, AuthError]:
        """Handle logout-all command.

        Returns:
            Success(count) of sessions deactivated.
        """
        count = await self._session_repo.deactivate_all_for_user(cmd.user_id)
        self._logger.info(
            "sessions_logged_out_all",
            user_id=str(cmd.user_id),
            sessions_deactivated=count,
        )
        return Success(value=count)


class LogoutSessionHandler:
    """Handler for revoking one session by id.

    A session owned by someone else is reported exactly like a missing
    one, so ids belonging to other accounts are never confirmed.
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        logger: LoggerProtocol,
    ) -> None:
        self._session_repo = session_repo
        self._logger = logger

    async def handle(self, cmd: LogoutSession) -> Result[None, AuthError]:
        """Handle logout-session command.

        Returns:
            Success(None) if deactivated.
            Failure(NOT_FOUND) if absent, not owned or already inactive.
        """
        if not await self._session_repo.deactivate_for_user(
            cmd.session_id, cmd.user_id
        ):
            return Failure(
                error=AuthError(
                    kind=ErrorKind.NOT_FOUND,
                    message=LogoutError.SESSION_NOT_FOUND,
                )
            )

        self._logger.info(
            "session_logged_out",
            user_id=str(cmd.user_id),
            session_id=str(cmd.session_id),
        )
        return Success(value=None)

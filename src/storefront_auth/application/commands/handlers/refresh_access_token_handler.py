"""Token refresh handler.

Flow:
1. Absent refresh token -> REFRESH_TOKEN_INVALID
2. Verify signature and expiry of the token itself
3. Find the active, unexpired session holding exactly this token
4. Reject if the owning user is inactive (ACCOUNT_LOCKED)
5. Mint a new access token from the joined email/role
6. Store it on the session and bump last activity
7. Return the new access token with the SAME refresh token (no rotation)

The token's own ``exp`` and the session's ``expires_at`` are independent
checks; both must pass.
"""

from datetime import UTC, datetime

from storefront_auth.application.commands.auth_commands import RefreshAccessToken
from storefront_auth.application.dtos import RefreshResult
from storefront_auth.core.enums import ErrorKind
from storefront_auth.core.errors import AuthError
from storefront_auth.core.result import Failure, Result, Success
from storefront_auth.domain.protocols import (
    LoggerProtocol,
    SessionRepository,
    TokenServiceProtocol,
)


class RefreshError:
    """Refresh-specific errors."""

    TOKEN_INVALID = "Refresh token is invalid or has expired"
    ACCOUNT_LOCKED = "Account is locked"


class RefreshAccessTokenHandler:
    """Handler for refresh command."""

    def __init__(
        self,
        session_repo: SessionRepository,
        token_service: TokenServiceProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._session_repo = session_repo
        self._token_service = token_service
        self._logger = logger

    async def handle(
        self, cmd: RefreshAccessToken
    ) -> Result[RefreshResult, AuthError]:
        """Handle refresh command.

        Returns:
            Success(RefreshResult) with a new access token.
            Failure(REFRESH_TOKEN_INVALID) or Failure(ACCOUNT_LOCKED).
        """
        # Step 1
        if not cmd.refresh_token:
            return self._invalid()

        # Step 2
        match self._token_service.decode_refresh_token(cmd.refresh_token):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=claims):
                pass

        # Step 3
        now = datetime.now(UTC)
        found = await self._session_repo.find_active_by_refresh_token(
            cmd.refresh_token, now
        )
        if found is None:
            return self._invalid()

        # Step 4
        if not found.user_is_active:
            return Failure(
                error=AuthError(
                    kind=ErrorKind.ACCOUNT_LOCKED,
                    message=RefreshError.ACCOUNT_LOCKED,
                )
            )

        # Step 5: role/email come from the join, not from the Account
        access_token = self._token_service.generate_access_token(
            account_id=found.session.account_id,
            user_id=claims.user_id,
            role=found.role,
            email=found.email,
        )

        # Step 6: a logout between lookup and update leaves nothing to refresh
        if not await self._session_repo.record_refresh(
            found.session.id, access_token, now
        ):
            return self._invalid()

        self._logger.info(
            "token_refreshed",
            user_id=str(claims.user_id),
            session_id=str(found.session.id),
        )

        # Step 7
        return Success(
            value=RefreshResult(
                access_token=access_token,
                refresh_token=cmd.refresh_token,
            )
        )

    def _invalid(self) -> Failure[AuthError]:
        return Failure(
            error=AuthError(
                kind=ErrorKind.REFRESH_TOKEN_INVALID,
                message=RefreshError.TOKEN_INVALID,
            )
        )

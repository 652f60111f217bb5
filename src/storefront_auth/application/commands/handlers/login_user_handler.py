"""Login handler.

Flow (each step is a hard gate):
1. Reject missing email or password (VALIDATION)
2. Look up the email account joined with its user (ACCOUNT_NOT_FOUND)
3. Reject inactive users (ACCOUNT_LOCKED)
4. Verify password (CREDENTIALS_INVALID)
5. Mint access + refresh tokens
6. Persist a new Session (expires after the refresh lifetime)
7. Return Success(LoginResult)

Unknown identifiers still run one dummy password verification so that
"no such account" and "wrong password" take the same time.
"""

from datetime import UTC, datetime

from uuid_extensions import uuid7

from storefront_auth.application.commands.auth_commands import LoginUser
from storefront_auth.application.dtos import LoginResult
from storefront_auth.core.enums import ErrorKind
from storefront_auth.core.errors import AuthError
from storefront_auth.core.result import Failure, Result, Success
from storefront_auth.domain.entities import Session
from storefront_auth.domain.protocols import (
    AccountRepository,
    LoggerProtocol,
    PasswordHashingProtocol,
    SessionRepository,
    TokenServiceProtocol,
)
from storefront_auth.domain.validators import normalize_email


class LoginError:
    """Login-specific errors."""

    MISSING_CREDENTIALS = "Email and password are required"
    ACCOUNT_NOT_FOUND = "Account not found"
    ACCOUNT_LOCKED = "Account is locked"
    INVALID_CREDENTIALS = "Invalid email or password"


class LoginUserHandler:
    """Handler for login command.

    Opens one Session per successful login, so each device holds its own
    refresh token and can be revoked independently.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        session_repo: SessionRepository,
        password_service: PasswordHashingProtocol,
        token_service: TokenServiceProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._account_repo = account_repo
        self._session_repo = session_repo
        self._password_service = password_service
        self._token_service = token_service
        self._logger = logger

    async def handle(self, cmd: LoginUser) -> Result[LoginResult, AuthError]:
        """Handle login command.

        Returns:
            Success(LoginResult) with both tokens.
            Failure(AuthError) at the first failed gate.
        """
        # Step 1
        details: dict[str, str] = {}
        if not (cmd.email or "").strip():
            details["email"] = "Email is required"
        if not cmd.password:
            details["password"] = "Password is required"
        if details:
            return Failure(
                error=AuthError(
                    kind=ErrorKind.VALIDATION,
                    message=LoginError.MISSING_CREDENTIALS,
                    details=details,
                )
            )
        email = normalize_email(cmd.email or "")
        password = cmd.password or ""

        # Step 2
        found = await self._account_repo.find_by_identifier(email)
        if found is None or not found.account.has_password():
            self._password_service.verify_dummy(password)
            return self._fail(ErrorKind.ACCOUNT_NOT_FOUND, LoginError.ACCOUNT_NOT_FOUND)
        account, user = found.account, found.user

        # Step 3
        if not user.can_authenticate():
            return self._fail(ErrorKind.ACCOUNT_LOCKED, LoginError.ACCOUNT_LOCKED)

        # Step 4
        if not self._password_service.verify_password(
            password, account.password_hash or ""
        ):
            return self._fail(
                ErrorKind.CREDENTIALS_INVALID, LoginError.INVALID_CREDENTIALS
            )

        # Step 5
        access_token = self._token_service.generate_access_token(
            account_id=account.id,
            user_id=user.id,
            role=user.role.value,
            email=user.email,
        )
        refresh_token = self._token_service.generate_refresh_token(
            account_id=account.id,
            user_id=user.id,
        )

        # Step 6
        now = datetime.now(UTC)
        refresh_ttl = self._token_service.refresh_ttl
        session = Session(
            id=uuid7(),
            user_id=user.id,
            account_id=account.id,
            session_token=access_token,
            refresh_token=refresh_token,
            expires_at=now + refresh_ttl,
            device_type=cmd.device.device_type,
            ip_address=cmd.device.ip_address,
            user_agent=cmd.device.user_agent,
            created_at=now,
            last_activity_at=now,
        )
        await self._session_repo.add(session)

        self._logger.info(
            "login_succeeded",
            user_id=str(user.id),
            session_id=str(session.id),
            device_type=session.device_type,
        )

        # Step 7
        return Success(
            value=LoginResult(
                user=user,
                session_id=session.id,
                access_token=access_token,
                refresh_token=refresh_token,
                refresh_ttl=refresh_ttl,
            )
        )

    def _fail(self, kind: ErrorKind, message: str) -> Failure[AuthError]:
        self._logger.warning("login_failed", reason=kind.value)
        return Failure(error=AuthError(kind=kind, message=message))

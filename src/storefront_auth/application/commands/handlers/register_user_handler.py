"""Registration handler.

Flow:
1. Validate required fields (every missing field reported at once)
2. Validate email format and optional role
3. Check identifier uniqueness
4. Hash password
5. Build User and email Account (UUIDv7 ids)
6. Persist both rows in one transaction
7. Return Success(RegistrationResult)

Architecture:
- Application layer ONLY imports from domain and core
- Repositories and services are injected via protocols
"""

from datetime import UTC, datetime

from uuid_extensions import uuid7

from storefront_auth.application.commands.auth_commands import RegisterUser
from storefront_auth.application.dtos import RegistrationResult
from storefront_auth.core.enums import ErrorKind
from storefront_auth.core.errors import AuthError
from storefront_auth.core.result import Failure, Result, Success
from storefront_auth.domain.entities import Account, User
from storefront_auth.domain.enums import AccountType, UserRole
from storefront_auth.domain.protocols import (
    AccountRepository,
    LoggerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)
from storefront_auth.domain.validators import validate_email


class RegistrationError:
    """Registration-specific errors."""

    VALIDATION_FAILED = "Validation failed"
    EMAIL_ALREADY_EXISTS = "Email already registered"
    INVALID_ROLE = "Invalid role"


_REQUIRED_FIELDS = {
    "email": "Email is required",
    "password": "Password is required",
    "fullName": "Full name is required",
    "phone": "Phone is required",
}


class RegisterUserHandler:
    """Handler for user registration command."""

    def __init__(
        self,
        user_repo: UserRepository,
        account_repo: AccountRepository,
        password_service: PasswordHashingProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize registration handler with dependencies.

        Args:
            user_repo: User repository (atomic user + account insert).
            account_repo: Account repository (identifier lookup).
            password_service: Password hashing service.
            logger: Structured logger.
        """
        self._user_repo = user_repo
        self._account_repo = account_repo
        self._password_service = password_service
        self._logger = logger

    async def handle(self, cmd: RegisterUser) -> Result[RegistrationResult, AuthError]:
        """Handle user registration command.

        Returns:
            Success(RegistrationResult) on successful registration.
            Failure(VALIDATION) listing every invalid field.
            Failure(CONFLICT, code DUPLICATE_EMAIL) if the email is taken.
        """
        # Step 1: Required fields, all reported together
        provided = {
            "email": cmd.email,
            "password": cmd.password,
            "fullName": cmd.full_name,
            "phone": cmd.phone,
        }
        details = {
            field: message
            for field, message in _REQUIRED_FIELDS.items()
            if not (provided[field] or "").strip()
        }

        # Step 2: Format checks on what was supplied
        email = ""
        if "email" not in details:
            try:
                email = validate_email(cmd.email or "")
            except ValueError as e:
                details["email"] = str(e)

        role = UserRole.CUSTOMER
        if cmd.role is not None:
            if UserRole.is_valid(cmd.role):
                role = UserRole(cmd.role)
            else:
                details["role"] = (
                    f"{RegistrationError.INVALID_ROLE}, "
                    f"expected one of: {', '.join(UserRole.values())}"
                )

        if details:
            return Failure(
                error=AuthError(
                    kind=ErrorKind.VALIDATION,
                    message=RegistrationError.VALIDATION_FAILED,
                    details=details,
                )
            )

        # Step 3: Identifier uniqueness
        if await self._account_repo.exists_identifier(email):
            return self._duplicate(email)

        # Step 4: Hash before opening the transaction
        password_hash = self._password_service.hash_password(cmd.password or "")

        # Step 5: Build entities
        now = datetime.now(UTC)
        user = User(
            id=uuid7(),
            email=email,
            full_name=(cmd.full_name or "").strip(),
            phone=(cmd.phone or "").strip(),
            role=role,
            created_at=now,
            updated_at=now,
        )
        account = Account(
            id=uuid7(),
            user_id=user.id,
            account_type=AccountType.EMAIL,
            identifier=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

        # Step 6: Both rows or neither (a concurrent duplicate lands here)
        if not await self._user_repo.create_with_account(user, account):
            return self._duplicate(email)

        self._logger.info(
            "user_registered",
            user_id=str(user.id),
            account_id=str(account.id),
            role=role.value,
        )

        # Step 7
        return Success(value=RegistrationResult(user=user, account=account))

    def _duplicate(self, email: str) -> Failure[AuthError]:
        self._logger.warning("user_registration_conflict", email=email)
        return Failure(
            error=AuthError(
                kind=ErrorKind.CONFLICT,
                message=RegistrationError.EMAIL_ALREADY_EXISTS,
                details={"email": RegistrationError.EMAIL_ALREADY_EXISTS},
                code="DUPLICATE_EMAIL",
            )
        )

"""Account domain entity (credential binding)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from storefront_auth.domain.enums import AccountType


@dataclass(slots=True, kw_only=True)
class Account:
    """Login method bound to a User.

    Business Rules:
        - ``identifier`` is unique across all accounts
        - EMAIL accounts verify exactly one password hash
        - OAUTH accounts have no password hash

    Attributes:
        id: Unique account identifier.
        user_id: Owning user.
        account_type: Login method.
        identifier: Login handle (email address for EMAIL accounts).
        password_hash: Opaque hash, None for password-less accounts.
        is_verified: Whether the identifier has been verified.
        verified_at: When verification happened.
        created_at: When the account was created.
        updated_at: When the account was last modified.
    """

    id: UUID
    user_id: UUID
    account_type: AccountType
    identifier: str
    password_hash: str | None = None
    is_verified: bool = False
    verified_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def has_password(self) -> bool:
        """Return True if this account can be verified with a password."""
        return self.password_hash is not None

"""User domain entity (customer profile).

Pure business logic, no framework dependencies. Credentials live on
Account, not here, so one profile can own several login methods.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from storefront_auth.domain.enums import UserRole


@dataclass(slots=True, kw_only=True)
class User:
    """Storefront user profile.

    Business Rules:
        - Inactive users cannot log in or refresh tokens (account locked)
        - Blocked users are rejected by the fresh-check auth policy
        - Never hard-deleted by authentication flows

    Attributes:
        id: Unique user identifier (immutable).
        email: Contact email (also the identifier of the email Account).
        full_name: Display name.
        phone: Contact phone number.
        role: Authorization role embedded in access tokens.
        avatar_url: Optional profile image URL.
        tier: Loyalty tier.
        loyalty_points: Accumulated loyalty points.
        is_active: Login gate; False means locked.
        is_blocked: Administrative block, checked against the database.
        created_at: When the profile was created.
        updated_at: When the profile was last modified.
    """

    id: UUID
    email: str
    full_name: str
    phone: str
    role: UserRole = UserRole.CUSTOMER
    avatar_url: str | None = None
    tier: str = "bronze"
    loyalty_points: int = 0
    is_active: bool = True
    is_blocked: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def can_authenticate(self) -> bool:
        """Return True if the user may obtain new tokens."""
        return self.is_active

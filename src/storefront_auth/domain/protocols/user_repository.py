"""User repository protocol (port)."""

from typing import Protocol
from uuid import UUID

from storefront_auth.domain.entities import Account, User


class UserRepository(Protocol):
    """Persistence port for user profiles.

    Registration creates the profile together with its first Account, so the
    port exposes one atomic operation for both rows.
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Load a user profile by id (authoritative, fresh read)."""
        ...

    async def create_with_account(self, user: User, account: Account) -> bool:
        """Insert user and account in a single transaction.

        Returns:
            True if both rows were written. False if a uniqueness
            constraint (email / identifier) rejected the insert, in which
            case neither row exists.
        """
        ...

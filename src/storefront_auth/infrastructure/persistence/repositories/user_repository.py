"""UserRepository - SQLAlchemy implementation of the UserRepository protocol.

Adapter for hexagonal architecture. Maps between User/Account domain
entities and UserModel/AccountModel rows.
"""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront_auth.domain.entities import Account, User
from storefront_auth.infrastructure.persistence.models import UserModel
from storefront_auth.infrastructure.persistence.repositories.mappers import (
    account_to_model,
    user_to_domain,
    user_to_model,
)


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    This class does NOT inherit from the protocol (structural typing).

    Example:
        >>> async with database.get_session() as db_session:
        ...     repo = UserRepository(db_session)
        ...     user = await repo.find_by_id(user_id)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Always re-reads the row so callers see blocks and deactivations
        made after the current session started.

        Args:
            user_id: User's unique identifier.

        Returns:
            User if found, None otherwise.
        """
        model = await self._session.get(UserModel, user_id, populate_existing=True)
        if model is None:
            return None
        return user_to_domain(model)

    async def create_with_account(self, user: User, account: Account) -> bool:
        """Insert a user and its first account atomically.

        The user row is flushed first so the account's foreign key resolves,
        then both rows are committed together. A unique violation on either
        row rolls back the whole transaction.

        Returns:
            True on success, False if email or identifier already exists.
        """
        try:
            self._session.add(user_to_model(user))
            await self._session.flush()
            self._session.add(account_to_model(account))
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            return False
        return True

"""AccountRepository - SQLAlchemy implementation of the AccountRepository protocol."""

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront_auth.domain.protocols import AccountWithUser
from storefront_auth.infrastructure.persistence.models import AccountModel, UserModel
from storefront_auth.infrastructure.persistence.repositories.mappers import (
    account_to_domain,
    user_to_domain,
)


class AccountRepository:
    """SQLAlchemy implementation of AccountRepository protocol.

    Login looks accounts up by identifier and needs the owning user in the
    same round-trip, so lookups join ``users``.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def find_by_identifier(self, identifier: str) -> AccountWithUser | None:
        """Find account by login handle, joined with its user.

        Args:
            identifier: Login handle (email for email accounts).

        Returns:
            AccountWithUser if found, None otherwise.
        """
        stmt = (
            select(AccountModel, UserModel)
            .join(UserModel, UserModel.id == AccountModel.user_id)
            .where(AccountModel.identifier == identifier)
        )
        result = await self._session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        account_model, user_model = row
        return AccountWithUser(
            account=account_to_domain(account_model),
            user=user_to_domain(user_model),
        )

    async def exists_identifier(self, identifier: str) -> bool:
        stmt = select(exists().where(AccountModel.identifier == identifier))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

"""Integration tests for UserRepository and AccountRepository."""

import pytest
from uuid_extensions import uuid7

from storefront_auth.domain.entities import Account, User
from storefront_auth.domain.enums import AccountType
from storefront_auth.infrastructure.persistence.repositories import (
    AccountRepository,
    UserRepository,
)


def create_user_and_account(email: str) -> tuple[User, Account]:
    user = User(id=uuid7(), email=email, full_name="Test User", phone="555-0100")
    account = Account(
        id=uuid7(),
        user_id=user.id,
        account_type=AccountType.EMAIL,
        identifier=email,
        password_hash="$2b$04$hash",
    )
    return user, account


@pytest.mark.integration
class TestCreateWithAccount:
    async def test_creates_both_rows(self, database):
        # Arrange
        user, account = create_user_and_account("a@x.com")

        # Act
        async with database.get_session() as session:
            created = await UserRepository(session).create_with_account(user, account)

        # Assert
        assert created is True
        async with database.get_session() as session:
            found = await AccountRepository(session).find_by_identifier("a@x.com")
        assert found is not None
        assert found.account.id == account.id
        assert found.user.id == user.id
        assert found.user.tier == "bronze"
        assert found.account.password_hash == "$2b$04$hash"

    async def test_duplicate_email_creates_nothing(self, database):
        user, account = create_user_and_account("a@x.com")
        async with database.get_session() as session:
            await UserRepository(session).create_with_account(user, account)

        duplicate_user, duplicate_account = create_user_and_account("a@x.com")
        async with database.get_session() as session:
            created = await UserRepository(session).create_with_account(
                duplicate_user, duplicate_account
            )

        assert created is False
        async with database.get_session() as session:
            assert await UserRepository(session).find_by_id(duplicate_user.id) is None
            found = await AccountRepository(session).find_by_identifier("a@x.com")
        assert found is not None
        assert found.account.id == account.id


@pytest.mark.integration
class TestLookups:
    async def test_find_by_id(self, database):
        user, account = create_user_and_account("a@x.com")
        async with database.get_session() as session:
            await UserRepository(session).create_with_account(user, account)

        async with database.get_session() as session:
            found = await UserRepository(session).find_by_id(user.id)

        assert found is not None
        assert found.email == "a@x.com"
        assert found.is_blocked is False
        assert found.created_at.tzinfo is not None

    async def test_missing_user(self, database):
        async with database.get_session() as session:
            assert await UserRepository(session).find_by_id(uuid7()) is None

    async def test_exists_identifier(self, database):
        user, account = create_user_and_account("a@x.com")
        async with database.get_session() as session:
            await UserRepository(session).create_with_account(user, account)

        async with database.get_session() as session:
            repo = AccountRepository(session)
            assert await repo.exists_identifier("a@x.com") is True
            assert await repo.exists_identifier("b@x.com") is False

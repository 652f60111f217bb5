"""Integration tests for SessionRepository against a real SQLite database.

Tests cover:
- add / find_active_by_refresh_token (active + unexpired + owner join)
- record_refresh (access token swap, activity bump)
- deactivate_by_refresh_token / deactivate_for_user / deactivate_all_for_user
- list_active_for_user ordering
- delete_stale
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from sqlalchemy import select
from uuid_extensions import uuid7

from storefront_auth.domain.entities import Account, Session, User
from storefront_auth.domain.enums import AccountType, UserRole
from storefront_auth.infrastructure.persistence.models import SessionModel
from storefront_auth.infrastructure.persistence.repositories import (
    SessionRepository,
    UserRepository,
)

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


async def create_user(database, email: str = "a@x.com", **user_fields) -> Account:
    user = User(
        id=uuid7(),
        email=email,
        full_name="Test User",
        phone="555-0100",
        **user_fields,
    )
    account = Account(
        id=uuid7(),
        user_id=user.id,
        account_type=AccountType.EMAIL,
        identifier=email,
        password_hash="$2b$04$hash",
    )
    async with database.get_session() as session:
        assert await UserRepository(session).create_with_account(user, account)
    return account


async def add_session(database, account: Account, refresh_token: str, **fields) -> Session:
    params = {
        "id": uuid7(),
        "user_id": account.user_id,
        "account_id": account.id,
        "session_token": f"access-{refresh_token}",
        "refresh_token": refresh_token,
        "expires_at": NOW + timedelta(days=7),
        "created_at": NOW,
        "last_activity_at": NOW,
    }
    params.update(fields)
    session_entity = Session(**params)
    async with database.get_session() as session:
        await SessionRepository(session).add(session_entity)
    return session_entity


@pytest.mark.integration
class TestFindActiveByRefreshToken:
    async def test_finds_active_session_with_owner(self, database):
        # Arrange
        account = await create_user(database, role=UserRole.ADMIN)
        added = await add_session(database, account, "refresh-1")

        # Act
        async with database.get_session() as session:
            found = await SessionRepository(session).find_active_by_refresh_token(
                "refresh-1", NOW
            )

        # Assert
        assert found is not None
        assert found.session.id == added.id
        assert found.email == "a@x.com"
        assert found.role == "admin"
        assert found.user_is_active is True
        assert found.session.expires_at == added.expires_at

    async def test_expiry_boundary(self, database):
        account = await create_user(database)
        added = await add_session(database, account, "refresh-1")

        async with database.get_session() as session:
            repo = SessionRepository(session)
            before = await repo.find_active_by_refresh_token(
                "refresh-1", added.expires_at - timedelta(seconds=1)
            )
            at = await repo.find_active_by_refresh_token("refresh-1", added.expires_at)

        assert before is not None
        assert at is None

    async def test_inactive_session_not_found(self, database):
        account = await create_user(database)
        await add_session(database, account, "refresh-1", is_active=False)

        async with database.get_session() as session:
            found = await SessionRepository(session).find_active_by_refresh_token(
                "refresh-1", NOW
            )

        assert found is None

    async def test_unknown_token_not_found(self, database):
        async with database.get_session() as session:
            found = await SessionRepository(session).find_active_by_refresh_token(
                "missing", NOW
            )

        assert found is None


@pytest.mark.integration
class TestRecordRefresh:
    async def test_updates_access_token_and_activity(self, database):
        account = await create_user(database)
        added = await add_session(database, account, "refresh-1")
        later = NOW + timedelta(hours=2)

        async with database.get_session() as session:
            updated = await SessionRepository(session).record_refresh(
                added.id, "new-access", later
            )
        async with database.get_session() as session:
            found = await SessionRepository(session).find_active_by_refresh_token(
                "refresh-1", later
            )

        assert updated is True
        assert found is not None
        assert found.session.session_token == "new-access"
        assert found.session.refresh_token == "refresh-1"
        assert found.session.last_activity_at == later

    async def test_unknown_session(self, database):
        async with database.get_session() as session:
            updated = await SessionRepository(session).record_refresh(
                uuid4(), "new-access", NOW
            )

        assert updated is False

    async def test_logged_out_session_is_not_refreshed(self, database):
        account = await create_user(database)
        added = await add_session(database, account, "refresh-1")

        async with database.get_session() as session:
            repo = SessionRepository(session)
            await repo.deactivate_by_refresh_token("refresh-1")
            updated = await repo.record_refresh(added.id, "new-access", NOW)

        assert updated is False


@pytest.mark.integration
class TestDeactivation:
    async def test_deactivate_by_refresh_token_is_idempotent(self, database):
        account = await create_user(database)
        await add_session(database, account, "refresh-1")

        async with database.get_session() as session:
            repo = SessionRepository(session)
            first = await repo.deactivate_by_refresh_token("refresh-1")
            second = await repo.deactivate_by_refresh_token("refresh-1")
            found = await repo.find_active_by_refresh_token("refresh-1", NOW)

        assert first is True
        assert second is False
        assert found is None

    async def test_deactivate_for_user_requires_ownership(self, database):
        owner = await create_user(database, "owner@x.com")
        other = await create_user(database, "other@x.com")
        added = await add_session(database, owner, "refresh-owner")

        async with database.get_session() as session:
            repo = SessionRepository(session)
            foreign = await repo.deactivate_for_user(added.id, other.user_id)
            still_active = await repo.find_active_by_refresh_token(
                "refresh-owner", NOW
            )
            owned = await repo.deactivate_for_user(added.id, owner.user_id)

        assert foreign is False
        assert still_active is not None
        assert owned is True

    async def test_deactivate_all_for_user_counts_only_active(self, database):
        account = await create_user(database)
        other = await create_user(database, "other@x.com")
        await add_session(database, account, "refresh-1")
        await add_session(database, account, "refresh-2")
        await add_session(database, account, "refresh-3", is_active=False)
        await add_session(database, other, "refresh-other")

        async with database.get_session() as session:
            repo = SessionRepository(session)
            count = await repo.deactivate_all_for_user(account.user_id)
            remaining = await repo.list_active_for_user(account.user_id, NOW)
            others = await repo.list_active_for_user(other.user_id, NOW)

        assert count == 2
        assert remaining == []
        assert len(others) == 1


@pytest.mark.integration
class TestListActiveForUser:
    async def test_most_recent_activity_first(self, database):
        account = await create_user(database)
        older = await add_session(
            database, account, "refresh-old", last_activity_at=NOW - timedelta(hours=1)
        )
        newer = await add_session(database, account, "refresh-new")
        await add_session(
            database,
            account,
            "refresh-expired",
            expires_at=NOW - timedelta(seconds=1),
        )

        async with database.get_session() as session:
            sessions = await SessionRepository(session).list_active_for_user(
                account.user_id, NOW
            )

        assert [s.id for s in sessions] == [newer.id, older.id]


@pytest.mark.integration
class TestDeleteStale:
    async def test_deletes_expired_and_long_inactive(self, database):
        account = await create_user(database)
        await add_session(database, account, "live")
        await add_session(
            database, account, "expired", expires_at=NOW - timedelta(minutes=1)
        )
        await add_session(
            database,
            account,
            "old-logout",
            is_active=False,
            last_activity_at=NOW - timedelta(days=31),
        )
        await add_session(
            database,
            account,
            "recent-logout",
            is_active=False,
            last_activity_at=NOW - timedelta(days=1),
        )

        async with database.get_session() as session:
            deleted = await SessionRepository(session).delete_stale(
                now=NOW, inactive_before=NOW - timedelta(days=30)
            )
        async with database.get_session() as session:
            remaining = (await session.scalars(select(SessionModel.refresh_token))).all()

        assert deleted == 2
        assert sorted(remaining) == ["live", "recent-logout"]

    async def test_retention_counts_from_logout(self, database):
        # Arrange: idle for 40 days, then logged out just now
        now = datetime.now(UTC)
        account = await create_user(database)
        await add_session(
            database,
            account,
            "idle-then-logout",
            created_at=now - timedelta(days=40),
            last_activity_at=now - timedelta(days=40),
            expires_at=now + timedelta(days=20),
        )
        async with database.get_session() as session:
            assert await SessionRepository(session).deactivate_by_refresh_token(
                "idle-then-logout"
            )

        # Act
        async with database.get_session() as session:
            deleted = await SessionRepository(session).delete_stale(
                now=now, inactive_before=now - timedelta(days=30)
            )
        async with database.get_session() as session:
            remaining = (await session.scalars(select(SessionModel.refresh_token))).all()

        # Assert
        assert deleted == 0
        assert remaining == ["idle-then-logout"]

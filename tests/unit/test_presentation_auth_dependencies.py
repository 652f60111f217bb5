"""Unit tests for access token extraction and the access policies."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import jwt
import pytest
from starlette.requests import Request

from storefront_auth.core.enums import ErrorKind
from storefront_auth.core.errors import AuthErrorException
from storefront_auth.domain.entities import User
from storefront_auth.infrastructure.security.jwt_service import JWTService
from storefront_auth.presentation.routers.api.middleware.auth_dependencies import (
    CurrentUser,
    extract_access_token,
    get_current_user_fresh,
    get_current_user_optional,
    require_any_role,
)

ACCESS_SECRET = "a" * 32


def create_request(headers: dict[str, str]) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [
            (key.lower().encode("latin-1"), value.encode("latin-1"))
            for key, value in headers.items()
        ],
    }
    return Request(scope)


def create_current_user(role: str = "customer") -> CurrentUser:
    return CurrentUser(user_id=uuid4(), email="a@x.com", role=role)


def create_token_service() -> JWTService:
    return JWTService(secret_key=ACCESS_SECRET, refresh_secret_key="r" * 32)


@pytest.mark.unit
class TestExtractAccessToken:
    def test_cookie_wins_over_header(self):
        request = create_request(
            {"Cookie": "token=from-cookie", "Authorization": "Bearer from-header"}
        )

        assert extract_access_token(request) == "from-cookie"

    def test_bearer_header(self):
        request = create_request({"Authorization": "Bearer abc.def.ghi"})

        assert extract_access_token(request) == "abc.def.ghi"

    def test_bearer_scheme_is_case_insensitive(self):
        request = create_request({"Authorization": "bearer abc"})

        assert extract_access_token(request) == "abc"

    def test_raw_header_value(self):
        request = create_request({"Authorization": "abc.def.ghi"})

        assert extract_access_token(request) == "abc.def.ghi"

    def test_missing(self):
        assert extract_access_token(create_request({})) is None

    def test_empty_bearer(self):
        request = create_request({"Authorization": "Bearer "})

        assert extract_access_token(request) is None


@pytest.mark.unit
class TestFreshCheck:
    async def test_returns_reloaded_user(self):
        current = create_current_user()
        user = User(id=current.user_id, email="a@x.com", full_name="A", phone="1")
        user_repo = AsyncMock()
        user_repo.find_by_id.return_value = user

        result = await get_current_user_fresh(current, user_repo)

        assert result is user
        user_repo.find_by_id.assert_awaited_once_with(current.user_id)

    async def test_missing_user_is_invalid_token(self):
        user_repo = AsyncMock()
        user_repo.find_by_id.return_value = None

        with pytest.raises(AuthErrorException) as exc_info:
            await get_current_user_fresh(create_current_user(), user_repo)

        assert exc_info.value.error.kind == ErrorKind.TOKEN_INVALID

    async def test_blocked_user_is_forbidden(self):
        current = create_current_user()
        user_repo = AsyncMock()
        user_repo.find_by_id.return_value = User(
            id=current.user_id,
            email="a@x.com",
            full_name="A",
            phone="1",
            is_blocked=True,
        )

        with pytest.raises(AuthErrorException) as exc_info:
            await get_current_user_fresh(current, user_repo)

        assert exc_info.value.error.kind == ErrorKind.FORBIDDEN

    async def test_inactive_user_is_locked(self):
        current = create_current_user()
        user_repo = AsyncMock()
        user_repo.find_by_id.return_value = User(
            id=current.user_id,
            email="a@x.com",
            full_name="A",
            phone="1",
            is_active=False,
        )

        with pytest.raises(AuthErrorException) as exc_info:
            await get_current_user_fresh(current, user_repo)

        assert exc_info.value.error.kind == ErrorKind.ACCOUNT_LOCKED


@pytest.mark.unit
class TestRoleGate:
    async def test_allowed_role_passes_through(self):
        checker = require_any_role("admin", "staff")
        current = create_current_user(role="staff")

        assert await checker(current) is current

    async def test_other_role_is_forbidden(self):
        checker = require_any_role("admin")

        with pytest.raises(AuthErrorException) as exc_info:
            await checker(create_current_user(role="customer"))

        assert exc_info.value.error.kind == ErrorKind.FORBIDDEN
        assert exc_info.value.error.details == {"requiredRoles": "admin"}


@pytest.mark.unit
class TestOptionalUser:
    async def test_missing_token_is_anonymous(self):
        user = await get_current_user_optional(
            create_request({}), create_token_service()
        )

        assert user is None

    async def test_expired_token_is_anonymous(self):
        token = jwt.encode(
            {
                "userId": str(uuid4()),
                "email": "a@x.com",
                "role": "customer",
                "exp": int((datetime.now(UTC) - timedelta(hours=1)).timestamp()),
            },
            ACCESS_SECRET,
            algorithm="HS256",
        )
        request = create_request({"Authorization": f"Bearer {token}"})

        user = await get_current_user_optional(request, create_token_service())

        assert user is None

    async def test_token_signed_with_other_secret_is_anonymous(self):
        foreign = JWTService(secret_key="x" * 32, refresh_secret_key="y" * 32)
        token = foreign.generate_access_token(
            account_id=uuid4(), user_id=uuid4(), role="customer", email="a@x.com"
        )
        request = create_request({"Authorization": f"Bearer {token}"})

        user = await get_current_user_optional(request, create_token_service())

        assert user is None

    async def test_valid_token_returns_current_user(self):
        user_id, account_id = uuid4(), uuid4()
        token = create_token_service().generate_access_token(
            account_id=account_id, user_id=user_id, role="staff", email="s@x.com"
        )
        request = create_request({"Authorization": f"Bearer {token}"})

        user = await get_current_user_optional(request, create_token_service())

        assert user == CurrentUser(
            user_id=user_id, email="s@x.com", role="staff", account_id=account_id
        )
        assert request.state.user == user

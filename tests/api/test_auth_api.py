"""API tests for the /auth endpoints.

Runs the full application (lifespan, middleware, exception handlers)
against a per-test SQLite database through TestClient.

Tests cover:
- Registration (201, duplicate 409, missing fields 400)
- Login, refresh cookie, refresh, logout (idempotent)
- Session listing, revoke-by-id ownership, logout-all
- Role gate and fresh-check policies
- Token compatibility and expiry
- Error envelope for unknown routes
"""

import os
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
import pytest
from sqlalchemy import update

from storefront_auth.infrastructure.persistence.models import UserModel

PASSWORD = "Secret123"


def register(client, email: str = "a@x.com", **overrides):
    payload = {
        "email": email,
        "password": PASSWORD,
        "fullName": "Alice",
        "phone": "0900000000",
    }
    payload.update(overrides)
    return client.post("/auth/register", json=payload)


def login(client, email: str = "a@x.com", password: str = PASSWORD, **headers):
    return client.post(
        "/auth/login",
        json={"email": email, "password": password},
        headers=headers,
    )


def bearer(response) -> dict[str, str]:
    return {"Authorization": f"Bearer {response.json()['token']['accessToken']}"}


def use_refresh_cookie(client, token: str | None) -> None:
    client.cookies.clear()
    if token is not None:
        client.cookies.set("refreshToken", token)


@pytest.mark.api
class TestRegisterEndpoint:
    def test_register_creates_user_and_account(self, client):
        # Act
        response = register(client)

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        user = body["data"]["user"]
        assert user["email"] == "a@x.com"
        assert user["fullName"] == "Alice"
        assert user["role"] == "customer"
        assert user["tier"] == "bronze"
        assert user["loyaltyPoints"] == 0
        account = body["data"]["account"]
        assert account["identifier"] == "a@x.com"
        assert account["userId"] == user["id"]
        assert "passwordHash" not in account
        assert PASSWORD not in response.text

    def test_email_is_stored_lowercase(self, client):
        response = register(client, email="Alice@Example.COM")

        assert response.status_code == 201
        assert response.json()["data"]["user"]["email"] == "alice@example.com"

    def test_duplicate_email(self, client):
        register(client)

        response = register(client, email="A@X.com")

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "DUPLICATE_EMAIL"

    def test_missing_fields_reported_together(self, client):
        response = client.post("/auth/register", json={})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert set(error["details"]) == {"email", "password", "fullName", "phone"}

    def test_invalid_email(self, client):
        response = register(client, email="not-an-email")

        assert response.status_code == 400
        assert "email" in response.json()["error"]["details"]

    def test_malformed_json_body(self, client):
        response = client.post(
            "/auth/register",
            content="not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_overlong_field_rejected_before_storage(self, client):
        response = register(client, phone="0" * 40)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "phone" in error["details"]


@pytest.mark.api
class TestLoginEndpoint:
    def test_login_sets_refresh_cookie_and_returns_access_token(self, client):
        register(client)

        response = login(client)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["data"]["user"]["email"] == "a@x.com"
        assert body["token"]["accessToken"]
        assert "refreshToken" not in body["token"]
        assert response.cookies.get("refreshToken")
        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "samesite=strict" in set_cookie
        assert "max-age=604800" in set_cookie

    def test_wrong_password(self, client):
        register(client)

        response = login(client, password="wrong")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTH_CREDENTIALS_INVALID"
        assert "set-cookie" not in response.headers

    def test_unknown_email(self, client):
        response = login(client, email="nobody@x.com")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTH_ACCOUNT_NOT_FOUND"

    def test_missing_credentials(self, client):
        response = client.post("/auth/login", json={})

        assert response.status_code == 400
        assert set(response.json()["error"]["details"]) == {"email", "password"}

    def test_email_is_case_insensitive(self, client):
        register(client)

        response = login(client, email="A@X.COM")

        assert response.status_code == 200


@pytest.mark.api
class TestSessionLifecycle:
    def test_register_login_list_scenario(self, client):
        # Arrange
        assert register(client).status_code == 201
        assert login(client, password="wrong").status_code == 401

        # Act
        logged_in = login(client, **{"device-type": "web"})
        sessions = client.get("/auth/sessions", headers=bearer(logged_in))

        # Assert
        assert sessions.status_code == 200
        data = sessions.json()["data"]
        assert data["total"] == 1
        session = data["sessions"][0]
        assert session["deviceType"] == "web"
        assert session["isCurrent"] is True

    def test_long_device_header_is_truncated(self, client):
        register(client)

        logged_in = login(client, **{"device-type": "d" * 200})
        sessions = client.get("/auth/sessions", headers=bearer(logged_in))

        assert logged_in.status_code == 200
        assert sessions.json()["data"]["sessions"][0]["deviceType"] == "d" * 64

    def test_refresh_cookie_lives_as_long_as_session(self, client):
        register(client)

        logged_in = login(client)
        session = client.get("/auth/sessions", headers=bearer(logged_in)).json()[
            "data"
        ]["sessions"][0]

        lifetime = datetime.fromisoformat(session["expiresAt"]) - datetime.fromisoformat(
            session["createdAt"]
        )
        set_cookie = logged_in.headers["set-cookie"].lower()
        assert f"max-age={int(lifetime.total_seconds())}" in set_cookie

    def test_refresh_then_logout(self, client):
        register(client)
        logged_in = login(client)
        refresh_token = logged_in.cookies["refreshToken"]
        use_refresh_cookie(client, refresh_token)

        refreshed = client.post("/auth/refresh")
        assert refreshed.status_code == 200
        assert refreshed.json()["data"]["accessToken"]

        logged_out = client.post("/auth/logout")
        assert logged_out.status_code == 200
        assert logged_out.json()["message"] == "Logged out successfully"

        use_refresh_cookie(client, refresh_token)
        rejected = client.post("/auth/refresh")
        assert rejected.status_code == 401
        assert rejected.json()["error"]["code"] == "REFRESH_TOKEN_INVALID"

    def test_refresh_without_cookie(self, client):
        use_refresh_cookie(client, None)

        response = client.post("/auth/refresh")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "REFRESH_TOKEN_INVALID"

    def test_logout_is_idempotent(self, client):
        register(client)
        refresh_token = login(client).cookies["refreshToken"]

        use_refresh_cookie(client, refresh_token)
        first = client.post("/auth/logout")
        use_refresh_cookie(client, refresh_token)
        second = client.post("/auth/logout")
        use_refresh_cookie(client, None)
        without_cookie = client.post("/auth/logout")

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["message"] == "No active session"
        assert without_cookie.status_code == 200

    def test_logout_all_ends_every_device(self, client):
        register(client)
        phone = login(client, **{"device-type": "ios"})
        laptop = login(client, **{"device-type": "web"})

        listed = client.get("/auth/sessions", headers=bearer(laptop))
        assert listed.json()["data"]["total"] == 2

        response = client.post("/auth/logout-all", headers=bearer(phone))

        assert response.status_code == 200
        assert response.json()["data"]["sessionsDeactivated"] == 2
        use_refresh_cookie(client, laptop.cookies["refreshToken"])
        assert client.post("/auth/refresh").status_code == 401

    def test_revoke_other_users_session_is_not_found(self, client):
        register(client, email="a@x.com")
        register(client, email="b@x.com")
        user_a = login(client, email="a@x.com")
        user_b = login(client, email="b@x.com")
        use_refresh_cookie(client, None)
        b_sessions = client.get("/auth/sessions", headers=bearer(user_b))
        b_session_id = b_sessions.json()["data"]["sessions"][0]["id"]

        response = client.delete(
            f"/auth/sessions/{b_session_id}", headers=bearer(user_a)
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"
        still_there = client.get("/auth/sessions", headers=bearer(user_b))
        assert still_there.json()["data"]["total"] == 1

    def test_revoke_own_session(self, client):
        register(client)
        logged_in = login(client)
        listed = client.get("/auth/sessions", headers=bearer(logged_in))
        session_id = listed.json()["data"]["sessions"][0]["id"]

        response = client.delete(
            f"/auth/sessions/{session_id}", headers=bearer(logged_in)
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Session revoked successfully"
        after = client.get("/auth/sessions", headers=bearer(logged_in))
        assert after.json()["data"]["total"] == 0

    def test_revoke_malformed_id_is_not_found(self, client):
        register(client)
        logged_in = login(client)

        response = client.delete("/auth/sessions/not-a-uuid", headers=bearer(logged_in))

        assert response.status_code == 404


@pytest.mark.api
class TestAuthPolicies:
    def test_protected_route_without_token(self, client):
        response = client.get("/auth/sessions")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "TOKEN_MISSING"

    def test_cleanup_requires_admin(self, client):
        register(client, email="admin@x.com", role="admin")
        register(client, email="c@x.com")
        admin = login(client, email="admin@x.com")
        customer = login(client, email="c@x.com")

        allowed = client.post("/auth/sessions/cleanup", headers=bearer(admin))
        forbidden = client.post("/auth/sessions/cleanup", headers=bearer(customer))
        anonymous = client.post("/auth/sessions/cleanup")

        assert allowed.status_code == 200
        assert allowed.json()["data"]["deleted"] == 0
        assert forbidden.status_code == 403
        assert forbidden.json()["error"]["code"] == "FORBIDDEN"
        assert anonymous.status_code == 401
        assert anonymous.json()["error"]["code"] == "TOKEN_MISSING"

    def test_me_rereads_user_and_rejects_blocked(self, client, app):
        register(client)
        logged_in = login(client)
        user_id = UUID(logged_in.json()["data"]["user"]["id"])

        ok = client.get("/auth/me", headers=bearer(logged_in))
        assert ok.status_code == 200
        assert ok.json()["data"]["user"]["email"] == "a@x.com"

        async def block_user() -> None:
            async with app.state.database.get_session() as session:
                await session.execute(
                    update(UserModel)
                    .where(UserModel.id == user_id)
                    .values(is_blocked=True)
                )

        client.portal.call(block_user)

        blocked = client.get("/auth/me", headers=bearer(logged_in))
        assert blocked.status_code == 403
        assert blocked.json()["error"]["code"] == "FORBIDDEN"

        # Claims-only routes keep accepting the token
        sessions = client.get("/auth/sessions", headers=bearer(logged_in))
        assert sessions.status_code == 200

    def test_expired_access_token(self, client):
        expired = jwt.encode(
            {
                "userId": "0192f7a4-6b1e-7c3d-9a2b-4c5d6e7f8a9b",
                "email": "a@x.com",
                "role": "customer",
                "exp": int((datetime.now(UTC) - timedelta(minutes=1)).timestamp()),
            },
            os.environ["JWT_SECRET_KEY"],
            algorithm="HS256",
        )

        response = client.get(
            "/auth/sessions", headers={"Authorization": f"Bearer {expired}"}
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "TOKEN_EXPIRED"

    def test_legacy_id_claim_token_is_accepted(self, client):
        register(client)
        user_id = login(client).json()["data"]["user"]["id"]
        legacy = jwt.encode(
            {
                "id": user_id,
                "email": "a@x.com",
                "role": "customer",
                "exp": int((datetime.now(UTC) + timedelta(minutes=5)).timestamp()),
            },
            os.environ["JWT_SECRET_KEY"],
            algorithm="HS256",
        )

        response = client.get("/auth/sessions", headers={"Authorization": legacy})

        assert response.status_code == 200
        assert response.json()["data"]["total"] == 1

    def test_token_signed_with_other_secret_is_invalid(self, client):
        forged = jwt.encode(
            {
                "userId": "0192f7a4-6b1e-7c3d-9a2b-4c5d6e7f8a9b",
                "email": "a@x.com",
                "role": "admin",
                "exp": int((datetime.now(UTC) + timedelta(minutes=5)).timestamp()),
            },
            "x" * 40,
            algorithm="HS256",
        )

        response = client.get(
            "/auth/sessions", headers={"Authorization": f"Bearer {forged}"}
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "TOKEN_INVALID"

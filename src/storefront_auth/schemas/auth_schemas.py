"""Authentication request/response schemas.

Pydantic models for the auth API. Request fields are optional at the schema
level: registration and login report every missing field together in the
error envelope, which the handlers own. Lengths are capped at the
storage column sizes; bcrypt only reads the first 72 bytes of a password.

Endpoints:
    POST   /auth/register    - Create user and email account
    POST   /auth/login       - Open a session
    POST   /auth/refresh     - Exchange refresh cookie for access token
    POST   /auth/logout      - End current session
    POST   /auth/logout-all  - End all sessions
    GET    /auth/me          - Current profile (fresh from database)
"""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field

from storefront_auth.domain.entities import Account, User
from storefront_auth.schemas.common_schemas import CamelModel, MessageResponse


# =============================================================================
# Requests
# =============================================================================


class RegisterRequest(CamelModel):
    """Request schema for user registration."""

    email: str | None = Field(
        None, max_length=255, description="Email address (login identifier)"
    )
    password: str | None = Field(None, max_length=72, description="Password")
    full_name: str | None = Field(None, max_length=255, description="Display name")
    phone: str | None = Field(None, max_length=32, description="Contact phone")
    role: str | None = Field(
        None, max_length=32, description="Optional role (default customer)"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "a@x.com",
                "password": "Secret123",
                "fullName": "Alice",
                "phone": "0900000000",
            }
        }
    )


class LoginRequest(CamelModel):
    """Request schema for login."""

    email: str | None = Field(None, max_length=255, description="Email address")
    password: str | None = Field(None, max_length=72, description="Password")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"email": "a@x.com", "password": "Secret123"},
        }
    )


# =============================================================================
# Resources
# =============================================================================


class UserResponse(CamelModel):
    """Public user profile."""

    id: UUID = Field(..., description="User identifier")
    email: str = Field(..., description="Email address")
    full_name: str = Field(..., description="Display name")
    phone: str = Field(..., description="Contact phone")
    role: str = Field(..., description="Role")
    avatar_url: str | None = Field(None, description="Profile image URL")
    tier: str = Field(..., description="Loyalty tier")
    loyalty_points: int = Field(..., description="Loyalty points")
    is_active: bool = Field(..., description="Login gate")
    created_at: datetime = Field(..., description="When the user registered")

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            phone=user.phone,
            role=user.role.value,
            avatar_url=user.avatar_url,
            tier=user.tier,
            loyalty_points=user.loyalty_points,
            is_active=user.is_active,
            created_at=user.created_at,
        )


class AccountResponse(CamelModel):
    """Redacted account view (never includes the password hash)."""

    id: UUID = Field(..., description="Account identifier")
    user_id: UUID = Field(..., description="Owning user")
    account_type: str = Field(..., description="email, phone or oauth")
    identifier: str = Field(..., description="Login handle")
    is_verified: bool = Field(..., description="Whether the identifier is verified")
    created_at: datetime = Field(..., description="When the account was created")

    @classmethod
    def from_entity(cls, account: Account) -> "AccountResponse":
        return cls(
            id=account.id,
            user_id=account.user_id,
            account_type=account.account_type.value,
            identifier=account.identifier,
            is_verified=account.is_verified,
            created_at=account.created_at,
        )


# =============================================================================
# Envelopes
# =============================================================================


class RegisterData(CamelModel):
    user: UserResponse
    account: AccountResponse


class RegisterResponse(MessageResponse):
    """201 response for registration."""

    data: RegisterData


class UserData(CamelModel):
    user: UserResponse


class AccessTokenData(CamelModel):
    access_token: str = Field(..., description="Short-lived access token")


class LoginResponse(MessageResponse):
    """200 response for login.

    The refresh token is delivered only as the ``refreshToken`` cookie.
    """

    data: UserData
    token: AccessTokenData

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Login successful",
                "data": {"user": {"email": "a@x.com", "fullName": "Alice"}},
                "token": {"accessToken": "eyJhbGciOiJIUzI1NiIs..."},
            }
        }
    )


class RefreshResponse(MessageResponse):
    """200 response for token refresh."""

    data: AccessTokenData


class ProfileResponse(MessageResponse):
    """200 response for the current profile."""

    data: UserData

"""JWT token service (adapter).

Implements TokenServiceProtocol using PyJWT.

Tokens:
    - Access:  {accountId, userId, role, email, iat, exp, jti}, signed with
      the access secret, default lifetime 1 day
    - Refresh: {accountId, userId, iat, exp, jti}, signed with a separate
      refresh secret, default lifetime 7 days

``jti`` makes every token unique, so two logins in the same second still
receive distinct refresh tokens (the session lookup key).

Security:
    - HMAC-SHA256 (HS256) by default
    - Distinct secrets: an access token never verifies as a refresh token
      and vice versa
    - Expired access tokens are reported separately from invalid ones
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from storefront_auth.core.enums import ErrorKind
from storefront_auth.core.errors import AuthError
from storefront_auth.core.result import Failure, Result, Success
from storefront_auth.domain.value_objects import (
    AccessClaims,
    ClaimsError,
    RefreshClaims,
)


class TokenError:
    """Token verification messages (user-safe)."""

    ACCESS_EXPIRED = "Access token has expired"
    ACCESS_INVALID = "Access token is invalid"
    REFRESH_INVALID = "Refresh token is invalid or has expired"


class JWTService:
    """JWT access/refresh token generation and verification.

    Usage:
        from storefront_auth.core.container import get_token_service

        token_service = get_token_service()
        access = token_service.generate_access_token(
            account_id=account.id,
            user_id=user.id,
            role=user.role.value,
            email=user.email,
        )

        match token_service.decode_access_token(access):
            case Success(value=claims):
                ...
            case Failure(error=error):
                ...
    """

    def __init__(
        self,
        *,
        secret_key: str,
        refresh_secret_key: str,
        algorithm: str = "HS256",
        access_expire_minutes: int = 60 * 24,
        refresh_expire_days: int = 7,
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Access-token signing secret (>= 32 chars).
            refresh_secret_key: Refresh-token signing secret (>= 32 chars,
                different from ``secret_key``).
            algorithm: JWT signing algorithm.
            access_expire_minutes: Access token lifetime.
            refresh_expire_days: Refresh token lifetime.

        Raises:
            ValueError: If a secret is too short or both secrets are equal.
        """
        if len(secret_key) < 32 or len(refresh_secret_key) < 32:
            msg = "JWT secret keys must be at least 32 bytes (256 bits)"
            raise ValueError(msg)
        if secret_key == refresh_secret_key:
            msg = "Access and refresh tokens must use different secrets"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._refresh_secret_key = refresh_secret_key
        self._algorithm = algorithm
        self._access_ttl = timedelta(minutes=access_expire_minutes)
        self._refresh_ttl = timedelta(days=refresh_expire_days)

    @property
    def refresh_ttl(self) -> timedelta:
        """Refresh token lifetime (also the session lifetime)."""
        return self._refresh_ttl

    def generate_access_token(
        self,
        *,
        account_id: UUID,
        user_id: UUID,
        role: str,
        email: str,
    ) -> str:
        """Generate a signed access token.

        Returns:
            JWT string (header.payload.signature).
        """
        claims = AccessClaims(
            user_id=user_id,
            email=email,
            role=role,
            account_id=account_id,
        )
        return self._encode(claims.to_payload(), self._secret_key, self._access_ttl)

    def generate_refresh_token(self, *, account_id: UUID, user_id: UUID) -> str:
        """Generate a signed refresh token (identity claims only)."""
        claims = RefreshClaims(user_id=user_id, account_id=account_id)
        return self._encode(
            claims.to_payload(), self._refresh_secret_key, self._refresh_ttl
        )

    def decode_access_token(self, token: str) -> Result[AccessClaims, AuthError]:
        """Verify an access token and decode its claims.

        Returns:
            Success(AccessClaims) if valid.
            Failure(TOKEN_EXPIRED) if the signature is valid but ``exp`` passed.
            Failure(TOKEN_INVALID) for bad signature, malformed token or an
            unusable claim set.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
            return Success(value=AccessClaims.from_payload(payload))
        except ExpiredSignatureError:
            return Failure(
                error=AuthError(
                    kind=ErrorKind.TOKEN_EXPIRED,
                    message=TokenError.ACCESS_EXPIRED,
                )
            )
        except (InvalidTokenError, ClaimsError):
            return Failure(
                error=AuthError(
                    kind=ErrorKind.TOKEN_INVALID,
                    message=TokenError.ACCESS_INVALID,
                )
            )

    def decode_refresh_token(self, token: str) -> Result[RefreshClaims, AuthError]:
        """Verify a refresh token and decode its claims.

        Any failure (signature, expiry, shape) is REFRESH_TOKEN_INVALID.
        """
        try:
            payload = jwt.decode(
                token, self._refresh_secret_key, algorithms=[self._algorithm]
            )
            return Success(value=RefreshClaims.from_payload(payload))
        except (InvalidTokenError, ClaimsError):
            return Failure(
                error=AuthError(
                    kind=ErrorKind.REFRESH_TOKEN_INVALID,
                    message=TokenError.REFRESH_INVALID,
                )
            )

    def _encode(self, claims: dict[str, Any], secret: str, ttl: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {
            **claims,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            "jti": str(uuid7()),
        }
        token: str = jwt.encode(payload, secret, algorithm=self._algorithm)
        return token

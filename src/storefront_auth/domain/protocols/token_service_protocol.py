"""Token issuing protocol (access + refresh JWTs)."""

from datetime import timedelta
from typing import Protocol
from uuid import UUID

from storefront_auth.core.errors import AuthError
from storefront_auth.core.result import Result
from storefront_auth.domain.value_objects import AccessClaims, RefreshClaims


class TokenServiceProtocol(Protocol):
    """Mint and verify signed, time-bound tokens.

    Access and refresh tokens are signed with different secrets, so one can
    never be accepted in place of the other.
    """

    @property
    def refresh_ttl(self) -> timedelta:
        """Refresh token lifetime; sessions expire after the same span."""
        ...

    def generate_access_token(
        self,
        *,
        account_id: UUID,
        user_id: UUID,
        role: str,
        email: str,
    ) -> str:
        """Mint a short-lived access token."""
        ...

    def generate_refresh_token(self, *, account_id: UUID, user_id: UUID) -> str:
        """Mint a long-lived refresh token carrying identity claims only."""
        ...

    def decode_access_token(self, token: str) -> Result[AccessClaims, AuthError]:
        """Verify an access token.

        Returns:
            Success(AccessClaims), or Failure with kind TOKEN_EXPIRED for an
            expired token and TOKEN_INVALID for anything else.
        """
        ...

    def decode_refresh_token(self, token: str) -> Result[RefreshClaims, AuthError]:
        """Verify a refresh token.

        Returns:
            Success(RefreshClaims), or Failure(REFRESH_TOKEN_INVALID) for any
            signature, expiry or shape problem.
        """
        ...

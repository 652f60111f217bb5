"""Token claim value objects.

Access tokens carry ``{accountId, userId, role, email, exp}``; refresh tokens
carry only ``{accountId, userId, exp}`` so a leaked refresh token reveals
less.

Compatibility decode:
    Older clients were issued access tokens whose user id claim is ``id``
    instead of ``userId``. ``AccessClaims.from_payload`` accepts exactly
    these two shapes, in this order of precedence:

        1. ``{"userId": ..., "email": ..., "role": ..., "accountId": ...}``
        2. ``{"id": ..., "email": ..., "role": ...}``  (legacy, no accountId)

    Any other shape is rejected as an invalid token.
"""

from dataclasses import dataclass
from typing import Any
from uuid import UUID


class ClaimsError(ValueError):
    """Raised when a verified token does not carry a usable claim set."""


def _parse_uuid(value: Any, claim: str) -> UUID:
    try:
        return UUID(str(value))
    except (TypeError, ValueError) as e:
        raise ClaimsError(f"Claim '{claim}' is not a valid identifier") from e


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessClaims:
    """Identity carried by an access token.

    Attributes:
        user_id: Owning user.
        email: User email at issue time.
        role: User role at issue time (may be stale, see DESIGN.md).
        account_id: Account used to log in (None for legacy tokens).
    """

    user_id: UUID
    email: str
    role: str
    account_id: UUID | None = None

    def to_payload(self) -> dict[str, str]:
        """Serialize to the canonical (``userId``) claim shape."""
        payload = {
            "userId": str(self.user_id),
            "email": self.email,
            "role": self.role,
        }
        if self.account_id is not None:
            payload["accountId"] = str(self.account_id)
        return payload

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "AccessClaims":
        """Decode a verified payload, tolerating the legacy ``id`` key.

        Raises:
            ClaimsError: If neither accepted shape matches.
        """
        if "userId" in payload:
            raw_user_id = payload["userId"]
        elif "id" in payload:
            raw_user_id = payload["id"]
        else:
            raise ClaimsError("Token carries no user identifier")

        email = payload.get("email")
        role = payload.get("role")
        if not isinstance(email, str) or not isinstance(role, str):
            raise ClaimsError("Token is missing email or role")

        raw_account_id = payload.get("accountId")
        return cls(
            user_id=_parse_uuid(raw_user_id, "userId"),
            email=email,
            role=role,
            account_id=(
                _parse_uuid(raw_account_id, "accountId")
                if raw_account_id is not None
                else None
            ),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class RefreshClaims:
    """Identity carried by a refresh token (deliberately minimal)."""

    user_id: UUID
    account_id: UUID

    def to_payload(self) -> dict[str, str]:
        return {"accountId": str(self.account_id), "userId": str(self.user_id)}

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "RefreshClaims":
        """Decode a verified refresh payload.

        Raises:
            ClaimsError: If userId or accountId is missing or malformed.
        """
        if "userId" not in payload or "accountId" not in payload:
            raise ClaimsError("Refresh token is missing identity claims")
        return cls(
            user_id=_parse_uuid(payload["userId"], "userId"),
            account_id=_parse_uuid(payload["accountId"], "accountId"),
        )

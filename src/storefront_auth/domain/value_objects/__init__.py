"""Domain value objects."""

from storefront_auth.domain.value_objects.token_claims import (
    AccessClaims,
    ClaimsError,
    RefreshClaims,
)

__all__ = [
    "AccessClaims",
    "ClaimsError",
    "RefreshClaims",
]

"""Account repository protocol (port)."""

from dataclasses import dataclass
from typing import Protocol

from storefront_auth.domain.entities import Account, User


@dataclass(frozen=True, slots=True, kw_only=True)
class AccountWithUser:
    """Account joined with its owning user (login lookup result)."""

    account: Account
    user: User


class AccountRepository(Protocol):
    """Persistence port for credential bindings."""

    async def find_by_identifier(self, identifier: str) -> AccountWithUser | None:
        """Look up an account by login handle, joined with its user."""
        ...

    async def exists_identifier(self, identifier: str) -> bool:
        """Return True if an account already uses ``identifier``."""
        ...

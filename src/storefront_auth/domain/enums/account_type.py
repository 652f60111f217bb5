"""Login methods an Account can represent."""

from enum import Enum


class AccountType(str, Enum):
    """Credential binding type.

    EMAIL accounts carry a password hash; OAUTH accounts have none.
    """

    EMAIL = "email"
    PHONE = "phone"
    OAUTH = "oauth"

"""Account database model (credential binding)."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront_auth.infrastructure.persistence.base import (
    BaseMutableModel,
    UTCDateTime,
)


class AccountModel(BaseMutableModel):
    """Login method table.

    Fields:
        id, created_at, updated_at: From BaseMutableModel
        user_id: Owning user (cascade delete)
        account_type: email / phone / oauth
        identifier: Login handle, unique across all accounts
        password_hash: bcrypt hash, NULL for OAuth accounts
        is_verified: Identifier verified flag
        verified_at: Verification time

    Indexes:
        - ix_accounts_identifier: Unique (login lookup)
        - ix_accounts_user_id: Accounts of a user
    """

    __tablename__ = "accounts"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    account_type: Mapped[str] = mapped_column(String(16), nullable=False)
    identifier: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
    )
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    verified_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        default=None,
    )

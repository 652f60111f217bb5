"""User database model (customer profile)."""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront_auth.infrastructure.persistence.base import BaseMutableModel


class UserModel(BaseMutableModel):
    """Customer profile table.

    Fields:
        id, created_at, updated_at: From BaseMutableModel
        email: Contact email (unique)
        full_name: Display name
        phone: Contact phone
        role: customer / staff / admin
        avatar_url: Profile image URL
        tier: Loyalty tier
        loyalty_points: Loyalty balance
        is_active: Login gate (False = locked)
        is_blocked: Administrative block

    Indexes:
        - ix_users_email: Unique index on email
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    role: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="customer",
    )
    avatar_url: Mapped[str | None] = mapped_column(
        String(512),
        nullable=True,
        default=None,
    )
    tier: Mapped[str] = mapped_column(String(32), nullable=False, default="bronze")
    loyalty_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_blocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

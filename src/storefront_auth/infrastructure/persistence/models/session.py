"""Session database model for multi-device login tracking.

One row per login. Logout flips ``is_active``; the reaper job deletes rows
that have expired or stayed inactive past the retention window.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from storefront_auth.infrastructure.persistence.base import (
    BaseModel,
    UTCDateTime,
    utc_now,
)


class SessionModel(BaseModel):
    """Login session table.

    Fields:
        id, created_at: From BaseModel
        user_id: Owning user (cascade delete)
        account_id: Account used to log in (cascade delete)
        session_token: Current access token
        refresh_token: Refresh token (unique lookup key)
        device_type: Client-reported device type
        ip_address: Client IP at login
        user_agent: User agent at login
        is_active: False after logout
        expires_at: Hard expiry
        last_activity_at: Last login/refresh

    Indexes:
        - ix_sessions_refresh_token: Unique (refresh/logout lookup)
        - ix_sessions_user_active: (user_id, is_active, expires_at) for
          session listing and logout-all
        - ix_sessions_cleanup: (expires_at, is_active) for the reaper
    """

    __tablename__ = "sessions"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    account_id: Mapped[UUID] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    )
    session_token: Mapped[str] = mapped_column(Text, nullable=False)
    refresh_token: Mapped[str] = mapped_column(
        String(1024),
        unique=True,
        index=True,
        nullable=False,
    )
    device_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    last_activity_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utc_now,
    )

    __table_args__ = (
        Index("ix_sessions_user_active", "user_id", "is_active", "expires_at"),
        Index("ix_sessions_cleanup", "expires_at", "is_active"),
    )

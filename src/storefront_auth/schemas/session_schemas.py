"""Session management response schemas.

Endpoints:
    GET    /auth/sessions          - List active sessions
    DELETE /auth/sessions/{id}     - Revoke one session
    POST   /auth/logout-all        - Revoke all sessions
    POST   /auth/sessions/cleanup  - Reap stale sessions (admin)
"""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field

from storefront_auth.application.dtos import SessionView
from storefront_auth.schemas.common_schemas import CamelModel, MessageResponse


class SessionResponse(CamelModel):
    """One active session."""

    id: UUID = Field(..., description="Session identifier")
    device_type: str | None = Field(None, description="Client device type")
    ip_address: str | None = Field(None, description="IP address at login")
    created_at: datetime = Field(..., description="Login time")
    last_activity: datetime = Field(..., description="Last login or refresh")
    expires_at: datetime = Field(..., description="Hard expiry")
    is_current: bool = Field(
        default=False,
        description="Whether this is the session making the request",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "0192f7a4-6b1e-7c3d-9a2b-4c5d6e7f8a9b",
                "deviceType": "web",
                "ipAddress": "203.0.113.7",
                "createdAt": "2026-01-01T12:00:00Z",
                "lastActivity": "2026-01-01T14:45:00Z",
                "expiresAt": "2026-01-08T12:00:00Z",
                "isCurrent": True,
            }
        }
    )

    @classmethod
    def from_view(cls, view: SessionView) -> "SessionResponse":
        return cls(
            id=view.id,
            device_type=view.device_type,
            ip_address=view.ip_address,
            created_at=view.created_at,
            last_activity=view.last_activity_at,
            expires_at=view.expires_at,
            is_current=view.is_current,
        )


class SessionListData(CamelModel):
    sessions: list[SessionResponse]
    total: int = Field(..., description="Number of active sessions")


class SessionListResponse(MessageResponse):
    data: SessionListData


class LogoutAllData(CamelModel):
    sessions_deactivated: int = Field(..., description="Sessions ended")


class LogoutAllResponse(MessageResponse):
    data: LogoutAllData


class CleanupData(CamelModel):
    deleted: int = Field(..., description="Sessions physically deleted")


class CleanupResponse(MessageResponse):
    data: CleanupData

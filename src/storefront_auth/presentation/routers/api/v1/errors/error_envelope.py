"""Error envelope schema.

Every error response in the API has the same shape:

    {
      "success": false,
      "error": {
        "code": "AUTH_CREDENTIALS_INVALID",
        "message": "Invalid email or password",
        "details": null,
        "timestamp": "2026-01-01T12:00:00.000000+00:00",
        "path": "/auth/login",
        "requestId": "req_1767268800000_k3x9q2a"
      }
    }

Exports:
    ErrorBody: The ``error`` member
    ErrorEnvelope: The full response body
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorBody(BaseModel):
    """Machine-readable error description.

    Attributes:
        code: Stable machine-readable code.
        message: Human-readable, user-safe message.
        details: Optional context (field -> message for validation errors).
        timestamp: ISO-8601 UTC time the error was produced.
        path: Request path.
        request_id: Correlation id, also found in server logs.
    """

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        None,
        description="Additional error context",
    )
    timestamp: str = Field(..., description="When the error occurred (UTC)")
    path: str = Field(..., description="Request path")
    request_id: str | None = Field(
        None,
        alias="requestId",
        description="Request correlation id",
    )

    model_config = ConfigDict(populate_by_name=True)


class ErrorEnvelope(BaseModel):
    """Error response body."""

    success: bool = Field(default=False, description="Always false for errors")
    error: ErrorBody

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "error": {
                    "code": "AUTH_CREDENTIALS_INVALID",
                    "message": "Invalid email or password",
                    "details": None,
                    "timestamp": "2026-01-01T12:00:00+00:00",
                    "path": "/auth/login",
                    "requestId": "req_1767268800000_k3x9q2a",
                },
            }
        }
    )

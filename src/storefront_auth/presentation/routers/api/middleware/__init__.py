"""API middleware and auth dependencies."""

from storefront_auth.presentation.routers.api.middleware.request_id_middleware import (
    RequestIdMiddleware,
    get_request_id,
)

__all__ = [
    "RequestIdMiddleware",
    "get_request_id",
]

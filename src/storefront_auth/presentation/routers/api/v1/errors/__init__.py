"""Error envelope, builder and exception handlers."""

from storefront_auth.presentation.routers.api.v1.errors.error_envelope import (
    ErrorBody,
    ErrorEnvelope,
)
from storefront_auth.presentation.routers.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)
from storefront_auth.presentation.routers.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)

__all__ = [
    "ErrorBody",
    "ErrorEnvelope",
    "ErrorResponseBuilder",
    "register_exception_handlers",
]

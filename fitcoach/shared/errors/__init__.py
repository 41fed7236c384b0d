from .base import (
    AppError,
    AuthenticationRequiredError,
    DomainError,
    ErrorKind,
    InfrastructureError,
    RoleForbiddenError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler, status_for

__all__ = [
    "AppError",
    "AuthenticationRequiredError",
    "DomainError",
    "ErrorKind",
    "InfrastructureError",
    "RoleForbiddenError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
    "status_for",
]

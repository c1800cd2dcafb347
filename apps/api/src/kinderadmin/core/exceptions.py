"""
Service Exceptions

Base error types shared by the service layers. Routers translate them
into HTTP responses with a `{failed, error, message}` body.
"""

from fastapi import HTTPException


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(ServiceError):
    """Raised when a referenced entity does not exist in its store."""

    def __init__(self, entity: str, entity_id: str | None = None):
        message = f"{entity} {entity_id} not found" if entity_id else f"{entity} not found"
        super().__init__(message=message, error_code="NOT_FOUND", status_code=404)


class ServiceValidationError(ServiceError):
    """
    Raised when submitted data fails a constraint the schema cannot check.

    Carries field-level messages so forms can show them next to inputs.
    """

    def __init__(self, message: str, field_errors: dict[str, list[str]] | None = None):
        self.field_errors = field_errors or {}
        super().__init__(message=message, error_code="VALIDATION_ERROR", status_code=422)


def to_http_exception(e: ServiceError) -> HTTPException:
    """Convert a service error into an HTTPException with a structured detail."""
    detail: dict = {
        "failed": True,
        "error": e.error_code,
        "message": e.message,
    }
    if isinstance(e, ServiceValidationError) and e.field_errors:
        detail["field_errors"] = e.field_errors
    return HTTPException(status_code=e.status_code, detail=detail)

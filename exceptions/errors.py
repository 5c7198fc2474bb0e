"""
Custom exception classes for the application.

Every error carries a code, a human-readable message and an HTTP status so
routes can render the standard error envelope.
"""

from typing import Optional, Any
from datetime import datetime
from enum import Enum


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "BRAND_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# BRAND ERRORS
# ===================

class BrandNotFoundError(NotFoundError):
    """Brand not found."""

    def __init__(self, brand_id: str):
        super().__init__(
            resource="Brand",
            identifier=brand_id,
            code="BRAND_NOT_FOUND"
        )


class BrandValidationError(ValidationError):
    """A required brand form field is missing or blank."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(
            code="BRAND_FIELD_REQUIRED",
            message=message or f"{field} is required",
            details={"field": field}
        )


class SaveErrorKind(str, Enum):
    """Why a brand save failed."""
    VALIDATION = "validation"
    PERSISTENCE = "persistence"


class BrandSaveError(AppError):
    """
    Saving a brand form failed.

    Validation failures never reach the database. Persistence failures carry
    the described database error so the admin sees the real reason instead
    of an empty message.
    """

    def __init__(
        self,
        kind: SaveErrorKind,
        detail: str,
        field: Optional[str] = None
    ):
        self.kind = kind
        self.detail = detail
        self.field = field

        details: dict[str, Any] = {"kind": kind.value, "detail": detail}
        if field:
            details["field"] = field

        if kind == SaveErrorKind.VALIDATION:
            super().__init__(
                code="BRAND_VALIDATION_FAILED",
                message=self.describe(),
                status_code=422,
                details=details
            )
        else:
            super().__init__(
                code="BRAND_SAVE_FAILED",
                message=self.describe(),
                status_code=500,
                details=details
            )

    def describe(self) -> str:
        """Readable one-line message for display."""
        if self.kind == SaveErrorKind.VALIDATION:
            return f"Invalid brand: {self.detail}"
        return f"Could not save brand: {self.detail}"

    def __str__(self) -> str:
        return self.describe()


# ===================
# IMAGE UPLOAD ERRORS
# ===================

class InvalidImageError(ValidationError):
    """Uploaded file is not an acceptable image."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="INVALID_IMAGE",
            message=message,
            details=details
        )

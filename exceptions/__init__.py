"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,
    DatabaseError,

    # Brands
    BrandNotFoundError,
    BrandValidationError,
    BrandSaveError,
    SaveErrorKind,

    # Image uploads
    InvalidImageError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",
    "DatabaseError",

    # Brands
    "BrandNotFoundError",
    "BrandValidationError",
    "BrandSaveError",
    "SaveErrorKind",

    # Image uploads
    "InvalidImageError",
]

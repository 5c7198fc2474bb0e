"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    TimestampMixin,
    PaginatedResponse
)
from models.brand import (
    WRITABLE_COLUMNS,
    NON_PERSISTED_FIELDS,
    BrandForm,
    BrandRecord,
    BrandResponse,
    BrandListResponse,
    ImageUploadResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",
    "PaginatedResponse",

    # Brand
    "WRITABLE_COLUMNS",
    "NON_PERSISTED_FIELDS",
    "BrandForm",
    "BrandRecord",
    "BrandResponse",
    "BrandListResponse",
    "ImageUploadResponse",
]

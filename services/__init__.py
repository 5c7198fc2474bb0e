"""
Business logic services.

Each service handles one domain area.
"""

from services.brand_form_mapper import to_persisted, from_persisted, validate_form
from services.brand_service import BrandService, get_brand_service
from services.image_storage_service import ImageStorageService, get_image_storage_service

__all__ = [
    # Mapping
    "to_persisted",
    "from_persisted",
    "validate_form",

    # Brands
    "BrandService",
    "get_brand_service",

    # Images
    "ImageStorageService",
    "get_image_storage_service",
]

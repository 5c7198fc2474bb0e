"""
Brand admin API routes.

Errors use the standard {"error": {code, message, details, timestamp}} body.
"""

from fastapi import APIRouter, File, Query, UploadFile
from fastapi.responses import JSONResponse, Response
import structlog

from models.brand import (
    BrandForm,
    BrandResponse,
    BrandListResponse,
    ImageUploadResponse,
)
from models.base import PaginatedResponse
from services.brand_service import get_brand_service
from services.image_storage_service import get_image_storage_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.get("", response_model=BrandListResponse)
async def list_brands(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
    include_inactive: bool = Query(False, description="Include inactive brands")
):
    """
    List brands ordered by name.

    Returns paginated list of brands.
    """
    try:
        service = get_brand_service()

        brands, total = service.get_all(
            page=page,
            page_size=page_size,
            active_only=not include_inactive
        )

        return BrandListResponse(
            data=brands,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=PaginatedResponse.count_pages(total, page_size)
        )

    except Exception as e:
        return handle_error(e)


@router.post("/images", response_model=ImageUploadResponse, status_code=201)
async def upload_brand_image(
    file: UploadFile = File(..., description="Brand image (png, jpg, webp, gif, svg)")
):
    """
    Upload an image for the brand gallery.

    The returned URL goes into BrandForm.images. The first image of the
    gallery is saved as the brand logo.

    Raises:
        422: Not an image, empty, or too large
        503: Storage unavailable
    """
    logger.info(
        "brand_image_upload_started",
        filename=file.filename,
        content_type=file.content_type
    )

    try:
        content = await file.read()
        service = get_image_storage_service()
        url, path = service.upload(file.filename, content, file.content_type)
        return ImageUploadResponse(url=url, path=path)

    except Exception as e:
        return handle_error(e)


@router.get("/{brand_id}", response_model=BrandResponse)
async def get_brand(brand_id: str):
    """
    Get a single brand by ID.

    Raises:
        404: Brand not found
    """
    try:
        service = get_brand_service()
        return service.get_by_id(brand_id)

    except Exception as e:
        return handle_error(e)


@router.get("/{brand_id}/form", response_model=BrandForm)
async def get_brand_form(brand_id: str):
    """
    Get a brand prepared for the edit form.

    The stored logo is returned as the first gallery image.

    Raises:
        404: Brand not found
    """
    try:
        service = get_brand_service()
        return service.get_form(brand_id)

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=BrandResponse, status_code=201)
async def create_brand(form: BrandForm):
    """
    Create a brand from the admin form.

    Raises:
        422: Name or slug missing
        500: Database rejected the brand (message explains why)
    """
    try:
        service = get_brand_service()
        return service.save(form)

    except Exception as e:
        return handle_error(e)


@router.put("/{brand_id}", response_model=BrandResponse)
async def update_brand(brand_id: str, form: BrandForm):
    """
    Save the admin form over an existing brand.

    Raises:
        404: Brand not found
        422: Name or slug missing
        500: Database rejected the brand (message explains why)
    """
    try:
        service = get_brand_service()
        return service.save(form, existing_id=brand_id)

    except Exception as e:
        return handle_error(e)


@router.delete("/{brand_id}", status_code=204)
async def delete_brand(brand_id: str):
    """
    Delete a brand (soft delete).

    Sets active=False rather than removing from database.

    Raises:
        404: Brand not found
    """
    try:
        service = get_brand_service()
        service.delete(brand_id)
        return Response(status_code=204)

    except Exception as e:
        return handle_error(e)

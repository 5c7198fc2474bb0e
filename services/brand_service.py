"""
Brand service for the admin brand screens.

Saves brand forms through the form mapper and reads brands back for listing
and editing. Only columns that exist on the brands table are ever written.
"""

from typing import Optional
import structlog

from config import get_supabase_client, settings, DatabaseSession
from models.brand import BrandForm, BrandResponse
from services.brand_form_mapper import to_persisted, from_persisted
from exceptions import (
    BrandNotFoundError,
    BrandSaveError,
    BrandValidationError,
    DatabaseError,
    SaveErrorKind,
)
from utils.error_format import describe_error

logger = structlog.get_logger(__name__)


class BrandService:
    """
    Brand business logic.

    Handles listing, loading, saving and soft-deleting brands.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = settings.brands_table

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(
        self,
        page: int = 1,
        page_size: int = 20,
        active_only: bool = True
    ) -> tuple[list[BrandResponse], int]:
        """
        Get brands ordered by name.

        Args:
            page: Page number (1-indexed)
            page_size: Items per page
            active_only: Only return active brands

        Returns:
            Tuple of (brands list, total count)
        """
        logger.info(
            "getting_brands",
            page=page,
            page_size=page_size,
            active_only=active_only
        )

        try:
            query = self.db.table(self.table).select("*", count="exact")

            if active_only:
                query = query.eq("active", True)

            offset = (page - 1) * page_size
            result = (
                query
                .order("name")
                .range(offset, offset + page_size - 1)
                .execute()
            )

            brands = [BrandResponse(**row) for row in result.data]
            total = result.count or 0

            logger.info("brands_retrieved", count=len(brands), total=total)
            return brands, total

        except Exception as e:
            logger.error("get_brands_failed", error=describe_error(e))
            raise DatabaseError("select", describe_error(e))

    def get_by_id(self, brand_id: str) -> BrandResponse:
        """
        Get a single brand by ID.

        Args:
            brand_id: Brand UUID

        Returns:
            BrandResponse

        Raises:
            BrandNotFoundError: If brand doesn't exist
        """
        logger.debug("getting_brand", brand_id=brand_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", brand_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_brand_failed",
                brand_id=brand_id,
                error=describe_error(e)
            )
            raise DatabaseError("select", describe_error(e))

        if not result.data:
            raise BrandNotFoundError(brand_id)

        return BrandResponse(**result.data[0])

    def get_by_slug(self, slug: str) -> Optional[BrandResponse]:
        """
        Get a brand by slug.

        Args:
            slug: Brand slug

        Returns:
            BrandResponse or None if not found
        """
        slug = (slug or "").strip()
        if not slug:
            return None

        logger.debug("getting_brand_by_slug", slug=slug)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("slug", slug)
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_brand_by_slug_failed",
                slug=slug,
                error=describe_error(e)
            )
            raise DatabaseError("select", describe_error(e))

        if not result.data:
            return None

        return BrandResponse(**result.data[0])

    def get_form(self, brand_id: str) -> BrandForm:
        """
        Load a stored brand as an edit form.

        Raises:
            BrandNotFoundError: If brand doesn't exist
        """
        return from_persisted(self.get_by_id(brand_id))

    # ===================
    # WRITE OPERATIONS
    # ===================

    def save(self, form: BrandForm, existing_id: Optional[str] = None) -> BrandResponse:
        """
        Validate a brand form and insert or update it.

        Args:
            form: Brand form as submitted
            existing_id: Brand UUID when editing, None when creating

        Returns:
            Stored BrandResponse

        Raises:
            BrandSaveError: Validation failed (nothing sent to the database)
                or the database rejected the write
            BrandNotFoundError: existing_id matches no brand
        """
        operation = "update" if existing_id else "insert"

        try:
            record = to_persisted(form)
        except BrandValidationError as e:
            logger.info(
                "brand_validation_failed",
                field=e.field,
                brand_id=existing_id
            )
            raise BrandSaveError(
                SaveErrorKind.VALIDATION,
                e.message,
                field=e.field
            ) from e

        row = record.to_row()
        logger.info(
            "saving_brand",
            operation=operation,
            brand_id=existing_id,
            slug=record.slug
        )

        try:
            with DatabaseSession(f"brand_{operation}", self.db) as client:
                if existing_id:
                    result = (
                        client.table(self.table)
                        .update(row)
                        .eq("id", existing_id)
                        .execute()
                    )
                else:
                    result = (
                        client.table(self.table)
                        .insert(row)
                        .execute()
                    )
        except Exception as e:
            detail = describe_error(e)
            logger.error(
                "save_brand_failed",
                operation=operation,
                brand_id=existing_id,
                slug=record.slug,
                error=detail,
                error_type=type(e).__name__
            )
            raise BrandSaveError(SaveErrorKind.PERSISTENCE, detail) from e

        if not result.data:
            if existing_id:
                raise BrandNotFoundError(existing_id)
            raise BrandSaveError(
                SaveErrorKind.PERSISTENCE,
                "Insert returned no row"
            )

        brand = BrandResponse(**result.data[0])

        logger.info(
            "brand_saved",
            operation=operation,
            brand_id=brand.id,
            slug=brand.slug,
            fields=sorted(row.keys())
        )

        return brand

    def delete(self, brand_id: str) -> bool:
        """
        Soft delete a brand (set active=False).

        Args:
            brand_id: Brand UUID

        Returns:
            True if deleted

        Raises:
            BrandNotFoundError: If brand doesn't exist
        """
        logger.info("deleting_brand", brand_id=brand_id)

        # Check brand exists
        self.get_by_id(brand_id)

        try:
            (
                self.db.table(self.table)
                .update({"active": False})
                .eq("id", brand_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "delete_brand_failed",
                brand_id=brand_id,
                error=describe_error(e)
            )
            raise DatabaseError("delete", describe_error(e))

        logger.info("brand_deleted", brand_id=brand_id)
        return True


# Singleton instance
_service: Optional[BrandService] = None


def get_brand_service() -> BrandService:
    """Get or create BrandService instance."""
    global _service
    if _service is None:
        _service = BrandService()
    return _service

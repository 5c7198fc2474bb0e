"""
Image storage for brand galleries.

Uploads images to a Supabase Storage bucket and returns public URLs the
admin form puts in BrandForm.images. No resizing or processing happens here.
"""

from pathlib import PurePath
from typing import Optional
from uuid import uuid4
import structlog

from config import get_supabase_client, get_admin_client, settings
from exceptions import ExternalServiceError, InvalidImageError
from utils.error_format import describe_error

logger = structlog.get_logger(__name__)

# Content type → accepted file extensions, first one is the default
ALLOWED_CONTENT_TYPES = {
    "image/png": (".png",),
    "image/jpeg": (".jpg", ".jpeg"),
    "image/webp": (".webp",),
    "image/gif": (".gif",),
    "image/svg+xml": (".svg",),
}

PATH_PREFIX = "brands"


class ImageStorageService:
    """Stores brand images and hands back stable URLs."""

    def __init__(self, client=None, bucket: Optional[str] = None):
        self.client = client or get_admin_client() or get_supabase_client()
        self.bucket = bucket or settings.brand_images_bucket
        self.max_bytes = settings.max_image_size_bytes

    def build_path(self, filename: Optional[str], content_type: str) -> str:
        """
        Object path for a new upload.

        Uses a random name so re-uploading a file never overwrites another
        brand's image. The original extension is kept only when it matches
        the content type.

        Examples:
            ("Logo.PNG", "image/png") → "brands/<uuid>.png"
            ("photo.jpeg", "image/jpeg") → "brands/<uuid>.jpeg"
            ("payload.html", "image/png") → "brands/<uuid>.png"
            (None, "image/jpeg") → "brands/<uuid>.jpg"
        """
        extensions = ALLOWED_CONTENT_TYPES[content_type]
        suffix = PurePath(filename or "").suffix.lower()
        if suffix not in extensions:
            suffix = extensions[0]
        return f"{PATH_PREFIX}/{uuid4().hex}{suffix}"

    def validate(self, content: bytes, content_type: Optional[str]) -> str:
        """
        Check an upload before sending it to storage.

        Returns:
            Normalized content type

        Raises:
            InvalidImageError: Empty, too large, or not an image
        """
        content_type = (content_type or "").split(";")[0].strip().lower()

        if content_type not in ALLOWED_CONTENT_TYPES:
            raise InvalidImageError(
                "File must be an image",
                details={
                    "provided": content_type or None,
                    "valid": sorted(ALLOWED_CONTENT_TYPES)
                }
            )

        if not content:
            raise InvalidImageError("Uploaded file is empty")

        if len(content) > self.max_bytes:
            raise InvalidImageError(
                f"Image exceeds {settings.max_image_size_mb} MB",
                details={"size_bytes": len(content), "max_bytes": self.max_bytes}
            )

        return content_type

    def upload(
        self,
        filename: Optional[str],
        content: bytes,
        content_type: Optional[str]
    ) -> tuple[str, str]:
        """
        Upload an image.

        Args:
            filename: Original file name (only the extension is kept)
            content: File bytes
            content_type: MIME type reported by the client

        Returns:
            Tuple of (public URL, object path)

        Raises:
            InvalidImageError: If the file is rejected
            ExternalServiceError: If storage fails
        """
        content_type = self.validate(content, content_type)
        path = self.build_path(filename, content_type)

        logger.info(
            "uploading_brand_image",
            bucket=self.bucket,
            path=path,
            content_type=content_type,
            size_bytes=len(content)
        )

        try:
            bucket = self.client.storage.from_(self.bucket)
            bucket.upload(
                path,
                content,
                {"content-type": content_type}
            )
            url = bucket.get_public_url(path)
        except Exception as e:
            detail = describe_error(e)
            logger.error(
                "upload_brand_image_failed",
                bucket=self.bucket,
                path=path,
                error=detail
            )
            raise ExternalServiceError(
                "storage",
                f"Image upload failed: {detail}",
                details={"bucket": self.bucket, "path": path}
            ) from e

        logger.info("brand_image_uploaded", path=path)
        return url, path


# Singleton instance
_service: Optional[ImageStorageService] = None


def get_image_storage_service() -> ImageStorageService:
    """Get or create ImageStorageService instance."""
    global _service
    if _service is None:
        _service = ImageStorageService()
    return _service

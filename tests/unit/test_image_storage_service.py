"""
Unit tests for ImageStorageService.

Run: pytest tests/unit/test_image_storage_service.py -v
"""

import pytest

from services.image_storage_service import ImageStorageService, PATH_PREFIX
from exceptions import ExternalServiceError, InvalidImageError

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class TestImageStorageServiceBuildPath:
    """Tests for ImageStorageService.build_path()"""

    def test_keeps_lowercased_extension(self, mock_supabase):
        service = ImageStorageService(client=mock_supabase)

        path = service.build_path("Logo.PNG", "image/png")

        assert path.startswith(f"{PATH_PREFIX}/")
        assert path.endswith(".png")

    def test_extension_from_content_type_when_missing(self, mock_supabase):
        service = ImageStorageService(client=mock_supabase)

        assert service.build_path(None, "image/jpeg").endswith(".jpg")
        assert service.build_path("logo", "image/webp").endswith(".webp")

    def test_mismatched_extension_replaced(self, mock_supabase):
        """A non-image suffix must not survive under an image content type."""
        service = ImageStorageService(client=mock_supabase)

        path = service.build_path("payload.html", "image/png")

        assert path.endswith(".png")
        assert ".html" not in path

    def test_alternate_extension_for_type_kept(self, mock_supabase):
        service = ImageStorageService(client=mock_supabase)

        assert service.build_path("photo.JPEG", "image/jpeg").endswith(".jpeg")
        assert service.build_path("photo.png", "image/jpeg").endswith(".jpg")

    def test_paths_are_unique(self, mock_supabase):
        """Two uploads of the same file must not overwrite each other."""
        service = ImageStorageService(client=mock_supabase)

        assert service.build_path("a.png", "image/png") != service.build_path("a.png", "image/png")


class TestImageStorageServiceValidate:
    """Tests for ImageStorageService.validate()"""

    def test_rejects_non_image(self, mock_supabase):
        service = ImageStorageService(client=mock_supabase)

        with pytest.raises(InvalidImageError) as exc_info:
            service.validate(b"%PDF-1.4", "application/pdf")

        assert exc_info.value.status_code == 422
        assert exc_info.value.details["provided"] == "application/pdf"

    def test_rejects_missing_content_type(self, mock_supabase):
        service = ImageStorageService(client=mock_supabase)

        with pytest.raises(InvalidImageError):
            service.validate(PNG_BYTES, None)

    def test_rejects_empty_file(self, mock_supabase):
        service = ImageStorageService(client=mock_supabase)

        with pytest.raises(InvalidImageError) as exc_info:
            service.validate(b"", "image/png")

        assert exc_info.value.message == "Uploaded file is empty"

    def test_rejects_oversized_file(self, mock_supabase):
        service = ImageStorageService(client=mock_supabase)
        service.max_bytes = 10

        with pytest.raises(InvalidImageError) as exc_info:
            service.validate(PNG_BYTES, "image/png")

        assert exc_info.value.details["max_bytes"] == 10

    def test_normalizes_content_type(self, mock_supabase):
        service = ImageStorageService(client=mock_supabase)

        assert service.validate(PNG_BYTES, "IMAGE/PNG; charset=binary") == "image/png"


class TestImageStorageServiceUpload:
    """Tests for ImageStorageService.upload()"""

    def test_upload_returns_public_url(self, mock_supabase):
        service = ImageStorageService(client=mock_supabase, bucket="brand-images")

        url, path = service.upload("logo.png", PNG_BYTES, "image/png")

        assert url == f"https://test.supabase.co/storage/v1/object/public/brand-images/{path}"
        upload = mock_supabase.storage.uploads[0]
        assert upload["bucket"] == "brand-images"
        assert upload["path"] == path
        assert upload["content"] == PNG_BYTES
        assert upload["file_options"] == {"content-type": "image/png"}

    def test_upload_stores_under_image_extension(self, mock_supabase):
        """Should store an image-typed upload under its image extension."""
        service = ImageStorageService(client=mock_supabase)

        url, path = service.upload("payload.html", PNG_BYTES, "image/png")

        assert path.endswith(".png")
        assert mock_supabase.storage.uploads[0]["path"] == path

    def test_invalid_file_never_uploaded(self, mock_supabase):
        service = ImageStorageService(client=mock_supabase)

        with pytest.raises(InvalidImageError):
            service.upload("notes.txt", b"hello", "text/plain")

        assert mock_supabase.storage.uploads == []

    def test_storage_failure_is_described(self, mock_supabase):
        mock_supabase.storage.error = Exception({"statusCode": 404, "error": "Not found", "message": "Bucket not found"})
        service = ImageStorageService(client=mock_supabase, bucket="missing")

        with pytest.raises(ExternalServiceError) as exc_info:
            service.upload("logo.png", PNG_BYTES, "image/png")

        error = exc_info.value
        assert error.status_code == 503
        assert error.code == "STORAGE_ERROR"
        assert error.message == "Image upload failed: Bucket not found (code 404)"
        assert error.details["bucket"] == "missing"

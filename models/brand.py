"""
Brand schemas for the admin form and the brands table.

The admin form works with a gallery of image URLs, while the brands table
only has a single logo column. BrandForm is what the UI edits, BrandRecord
is exactly what may be written to the table, BrandResponse is a stored row.
"""

from pydantic import ConfigDict, Field, field_validator
from typing import Any, Optional

from models.base import BaseSchema, PaginatedResponse, TimestampMixin


# Columns the brands table accepts on insert/update.
WRITABLE_COLUMNS: tuple[str, ...] = (
    "name",
    "slug",
    "description",
    "logo",
    "origin_country",
    "established_year",
    "specialty",
    "active",
)

# Form fields the UI may send that have no column.
NON_PERSISTED_FIELDS: frozenset[str] = frozenset({"images", "sort_order"})


def _year_to_text(v: Any) -> Any:
    """Established year arrives as a number from some clients."""
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


class BrandForm(BaseSchema):
    """
    Brand as edited in an admin session.

    Required fields are not enforced here: a half-filled form is a valid
    form. The mapper checks name and slug when the form is saved so it can
    report which field is missing.
    """

    name: str = Field(
        "",
        max_length=200,
        description="Brand name",
        examples=["Acme Tiles"]
    )
    slug: str = Field(
        "",
        max_length=200,
        description="URL slug (unique)",
        examples=["acme-tiles"]
    )
    description: Optional[str] = Field(
        None,
        description="Free-text description"
    )
    images: list[str] = Field(
        default_factory=list,
        description="Uploaded image URLs, first one becomes the logo"
    )
    logo: Optional[str] = Field(
        None,
        description="Legacy single logo URL"
    )
    origin_country: Optional[str] = Field(
        None,
        max_length=100,
        description="Country the brand comes from"
    )
    established_year: Optional[str] = Field(
        None,
        max_length=20,
        description="Year the brand was founded"
    )
    specialty: Optional[str] = Field(
        None,
        description="What the brand is known for"
    )
    active: bool = Field(
        True,
        description="Whether the brand is shown"
    )

    @field_validator("name", "slug", mode="before")
    @classmethod
    def none_to_blank(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("images", mode="before")
    @classmethod
    def none_to_empty_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("established_year", mode="before")
    @classmethod
    def year_as_text(cls, v: Any) -> Any:
        return _year_to_text(v)


class BrandRecord(BaseSchema):
    """
    Row payload written to the brands table.

    Mirrors WRITABLE_COLUMNS exactly. Extra keys are rejected so a stray
    images or sort_order field can never reach the database.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Brand name")
    slug: str = Field(..., min_length=1, description="URL slug")
    description: Optional[str] = Field(None, description="Description")
    logo: Optional[str] = Field(None, description="Logo URL")
    origin_country: Optional[str] = Field(None, description="Country of origin")
    established_year: Optional[str] = Field(None, description="Founding year")
    specialty: Optional[str] = Field(None, description="Specialty")
    active: bool = Field(..., description="Whether the brand is shown")

    def to_row(self) -> dict:
        """Dict ready for insert/update, nulls included."""
        return self.model_dump(include=set(WRITABLE_COLUMNS))


class BrandResponse(BaseSchema, TimestampMixin):
    """
    Stored brand row.

    Used for GET responses and as the result of a save.
    """

    id: str = Field(..., description="Brand UUID")
    name: str = Field(..., description="Brand name")
    slug: str = Field(..., description="URL slug")
    description: Optional[str] = Field(None, description="Description")
    logo: Optional[str] = Field(None, description="Logo URL")
    origin_country: Optional[str] = Field(None, description="Country of origin")
    established_year: Optional[str] = Field(None, description="Founding year")
    specialty: Optional[str] = Field(None, description="Specialty")
    active: bool = Field(..., description="Whether the brand is shown")

    @field_validator("established_year", mode="before")
    @classmethod
    def year_as_text(cls, v: Any) -> Any:
        return _year_to_text(v)


class BrandListResponse(PaginatedResponse):
    """List of brands with pagination."""

    data: list[BrandResponse]


class ImageUploadResponse(BaseSchema):
    """Public URL of an uploaded brand image."""

    url: str = Field(..., description="Public URL to put in BrandForm.images")
    path: str = Field(..., description="Object path inside the bucket")

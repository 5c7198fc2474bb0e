"""
Mapping between the brand admin form and the brands table.

The form has an image gallery and the table has one logo column. Saving
keeps the first image as the logo and drops the rest. Loading an existing
brand puts its logo back into the gallery so old records still show an image.
"""

from typing import Optional

import structlog

from exceptions import BrandValidationError
from models.brand import BrandForm, BrandRecord, BrandResponse
from utils.text_utils import clean_optional_text, clean_required_text

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = ("name", "slug")


def validate_form(form: BrandForm) -> None:
    """
    Check required fields, name first.

    Raises:
        BrandValidationError: If name or slug is blank
    """
    for field in REQUIRED_FIELDS:
        if not clean_required_text(getattr(form, field)):
            raise BrandValidationError(field)


def resolve_logo(form: BrandForm) -> Optional[str]:
    """
    images[0] when the gallery has any entry, else the legacy logo, else None.

    Values are taken as submitted so a stored logo survives a load/save cycle.
    """
    if form.images:
        return form.images[0]
    return form.logo


def to_persisted(form: BrandForm) -> BrandRecord:
    """
    Project a form onto the brands table.

    Args:
        form: Brand form as submitted

    Returns:
        BrandRecord with only writable columns

    Raises:
        BrandValidationError: If a required field is blank
    """
    validate_form(form)

    record = BrandRecord(
        name=clean_required_text(form.name),
        slug=clean_required_text(form.slug),
        description=clean_optional_text(form.description),
        logo=resolve_logo(form),
        origin_country=clean_optional_text(form.origin_country),
        established_year=clean_optional_text(form.established_year),
        specialty=clean_optional_text(form.specialty),
        active=form.active,
    )

    if len(form.images) > 1:
        logger.debug(
            "brand_extra_images_dropped",
            slug=record.slug,
            dropped=len(form.images) - 1
        )

    return record


def from_persisted(record: BrandResponse) -> BrandForm:
    """
    Build an edit form from a stored brand.

    The logo becomes the only gallery image (no images when there is no logo).
    """
    return BrandForm(
        name=record.name,
        slug=record.slug,
        description=record.description,
        images=[record.logo] if record.logo is not None else [],
        logo=record.logo,
        origin_country=record.origin_country,
        established_year=record.established_year,
        specialty=record.specialty,
        active=record.active,
    )

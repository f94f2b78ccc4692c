from __future__ import annotations

from typing import Any, Dict, Mapping

from ..common.datetime_utils import current_year
from ..common.validators import (
    FieldChecks,
    require_alphanumeric,
    require_float,
    require_int,
    require_min_length,
    require_non_empty,
)
from ..core.constants import (
    COLOR_MAX_LENGTH,
    IMAGE_PATH_MAX_LENGTH,
    MAX_MILES,
    MAX_PRICE,
    MIN_INVENTORY_YEAR,
    NAME_MAX_LENGTH,
)

DEFAULT_IMAGE = "/images/vehicles/no-image.png"
DEFAULT_THUMBNAIL = "/images/vehicles/no-image-tn.png"


def validate_classification_name(name: str) -> str:
    checks = FieldChecks()
    value = checks.check(
        require_non_empty,
        name,
        "Classification name is required.",
        max_len=NAME_MAX_LENGTH,
        long_message=f"Classification name must be at most {NAME_MAX_LENGTH} characters.",
    )
    if value is not None:
        value = checks.check(require_alphanumeric, value, "No spaces or special characters.")
    checks.raise_if_any("Please fix the errors below.")
    return value


def sticky_item_values(form: Mapping[str, Any]) -> Dict[str, Any]:
    """Echo an inventory form back, falling back to the placeholder images."""
    values = {
        "inv_make": form.get("inv_make", ""),
        "inv_model": form.get("inv_model", ""),
        "inv_year": form.get("inv_year", ""),
        "inv_description": form.get("inv_description", ""),
        "inv_image": form.get("inv_image") or DEFAULT_IMAGE,
        "inv_thumbnail": form.get("inv_thumbnail") or DEFAULT_THUMBNAIL,
        "inv_price": form.get("inv_price", ""),
        "inv_miles": form.get("inv_miles", ""),
        "inv_color": form.get("inv_color", ""),
        "classification_id": form.get("classification_id", ""),
    }
    return {k: (v.strip() if isinstance(v, str) else v) for k, v in values.items()}


def validate_inventory_item(form: Mapping[str, Any]) -> Dict[str, Any]:
    checks = FieldChecks()
    max_year = current_year() + 2
    values = {
        "inv_make": checks.check(
            require_min_length,
            form.get("inv_make"),
            "Make must be at least 3 characters.",
            3,
            max_len=NAME_MAX_LENGTH,
            long_message=f"Make must be at most {NAME_MAX_LENGTH} characters.",
        ),
        "inv_model": checks.check(
            require_min_length,
            form.get("inv_model"),
            "Model must be at least 3 characters.",
            3,
            max_len=NAME_MAX_LENGTH,
            long_message=f"Model must be at most {NAME_MAX_LENGTH} characters.",
        ),
        "inv_year": checks.check(
            require_int,
            form.get("inv_year"),
            f"Year must be between {MIN_INVENTORY_YEAR} and {max_year}.",
            min_value=MIN_INVENTORY_YEAR,
            max_value=max_year,
        ),
        "inv_description": checks.check(
            require_min_length, form.get("inv_description"), "Description must be at least 10 characters.", 10
        ),
        "inv_image": checks.check(
            require_min_length,
            form.get("inv_image"),
            "Image path is required.",
            6,
            max_len=IMAGE_PATH_MAX_LENGTH,
            long_message="Image path is too long.",
        ),
        "inv_thumbnail": checks.check(
            require_min_length,
            form.get("inv_thumbnail"),
            "Thumbnail path is required.",
            6,
            max_len=IMAGE_PATH_MAX_LENGTH,
            long_message="Thumbnail path is too long.",
        ),
        "inv_price": checks.check(
            require_float,
            form.get("inv_price"),
            f"Price must be a number between 0 and {MAX_PRICE:,.2f}.",
            min_value=0,
            max_value=MAX_PRICE,
        ),
        "inv_miles": checks.check(
            require_int,
            form.get("inv_miles"),
            "Miles must be a whole number.",
            min_value=0,
            max_value=MAX_MILES,
        ),
        "inv_color": checks.check(
            require_min_length,
            form.get("inv_color"),
            "Color must be at least 3 characters.",
            3,
            max_len=COLOR_MAX_LENGTH,
            long_message=f"Color must be at most {COLOR_MAX_LENGTH} characters.",
        ),
        "classification_id": checks.check(
            require_int, form.get("classification_id"), "Please choose a classification.", min_value=1
        ),
    }
    checks.raise_if_any()
    return values

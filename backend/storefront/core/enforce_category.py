"""Category Field Enforcement — ordered, pure validation of category creation input.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return error dict on violation, None on success
    - validate_category_fields chains all checks — first error wins
    - Runs before any store lookup or image upload (no side effects on invalid input)

Design Decisions:
    - Return dicts (not exceptions): same shape as the uniqueness checks in
      services, so handlers raise from a single place
    - Blank-after-strip counts as missing: "   " is not a category name
"""

from storefront.core import language_strings as strings


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def check_required_fields(name: str | None, code: str | None) -> dict | None:
    """Rule 1: name and code must both be present and non-blank."""
    for field, value in (("name", name), ("code", code)):
        if _is_blank(value):
            return {
                "error_code": "FIELDS_REQUIRED",
                "field": field,
                "message": strings.ALL_FIELDS_REQUIRED,
            }
    return None


def check_image_reference(image_url: str | None) -> dict | None:
    """Rule 2: an image reference must accompany the category."""
    if _is_blank(image_url):
        return {
            "error_code": "IMAGE_REQUIRED",
            "field": "imageUrl",
            "message": strings.CATEGORY_IMAGE_REQUIRED,
        }
    return None


def validate_category_fields(
    name: str | None, code: str | None, image_url: str | None,
) -> dict | None:
    """Chain all field checks. Returns first error or None."""
    return (
        check_required_fields(name, code)
        or check_image_reference(image_url)
    )


def duplicate_error(field: str) -> dict:
    """Error dict for a uniqueness collision on `name` or `code`."""
    message = (
        strings.CATEGORY_CODE_EXISTS if field == "code"
        else strings.CATEGORY_NAME_EXISTS
    )
    return {"error_code": "DUPLICATE_FIELD", "field": field, "message": message}

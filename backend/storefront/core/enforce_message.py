"""Contact Message Enforcement — ordered, pure validation of contact form input.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return error dict on violation, None on success
    - Order: presence of all fields -> e-mail shape -> length limits
    - Length limits mirror the public form's maxLength attributes

Design Decisions:
    - Loose e-mail regex (one @, a dot in the domain, no spaces): deliverability
      is not checked here, only obvious typos
"""

import re

from storefront.core import language_strings as strings

MESSAGE_FIELDS = ("name", "email", "title", "content")

FIELD_MAX_LENGTHS: dict[str, int] = {
    "name": 100,
    "email": 255,
    "title": 100,
    "content": 500,
}

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_message_fields(fields: dict) -> dict[str, str]:
    """Strip every known field; missing fields become empty strings."""
    return {
        key: (fields.get(key) or "").strip()
        for key in MESSAGE_FIELDS
    }


def check_required(fields: dict[str, str]) -> dict | None:
    for key in MESSAGE_FIELDS:
        if not fields.get(key):
            return {
                "error_code": "FIELDS_REQUIRED",
                "field": key,
                "message": strings.ALL_FIELDS_REQUIRED,
            }
    return None


def check_email(fields: dict[str, str]) -> dict | None:
    if not _EMAIL_RE.match(fields["email"]):
        return {
            "error_code": "INVALID_EMAIL",
            "field": "email",
            "message": strings.MESSAGE_INVALID_EMAIL,
        }
    return None


def check_lengths(fields: dict[str, str]) -> dict | None:
    for key, limit in FIELD_MAX_LENGTHS.items():
        if len(fields[key]) > limit:
            return {
                "error_code": "FIELD_TOO_LONG",
                "field": key,
                "message": strings.field_too_long(key),
            }
    return None


def validate_message_fields(fields: dict[str, str]) -> dict | None:
    """Chain all checks on normalized fields. Returns first error or None."""
    return (
        check_required(fields)
        or check_email(fields)
        or check_lengths(fields)
    )

"""Language Strings — centralized user-facing text for API responses and client alerts.

Invariants:
    - All strings are pure data (no IO, no computation beyond formatting)
    - Storefront audience is Bulgarian; every envelope message comes from here
    - Clients match on these exact strings, so wording changes are API changes

Design Decisions:
    - Module constants over a gettext catalog: single locale
"""

# --- Shared -------------------------------------------------------------------

ALL_FIELDS_REQUIRED = "Всички полета са задължителни!"
INVALID_REQUEST_BODY = "Невалидни данни на заявката!"
GENERIC_SERVER_ERROR = "Възникна грешка! Моля, опитайте отново!"

# --- Categories ---------------------------------------------------------------

CATEGORY_IMAGE_REQUIRED = "Трябва да качите изображение на категорията!"
CATEGORY_NAME_EXISTS = "Категория с това име вече съществува!"
CATEGORY_CODE_EXISTS = "Категория с този код вече съществува!"
CATEGORY_CREATED = "Категорията е добавена успешно!"
CATEGORY_LIST_FAILED = "Възникна грешка при извличане на данните на категориите!"

# --- Contact messages ---------------------------------------------------------

MESSAGE_INVALID_EMAIL = "Моля, въведете валиден e-mail адрес!"
MESSAGE_SENT = "Съобщението е изпратено успешно!"
MESSAGE_SEND_FAILED = "Възникна грешка при изпращане на съобщението!"
MESSAGE_LIST_FAILED = "Възникна грешка при извличане на съобщенията!"

_FIELD_LABELS: dict[str, str] = {
    "name": "Име",
    "email": "E-mail",
    "title": "Тема",
    "content": "Съобщение",
}

# --- Products -----------------------------------------------------------------

PRODUCT_SEARCH_FAILED = "Възникна грешка при търсене на продуктите!"
PRODUCT_NOT_FOUND = "Продуктът не е намерен!"
PRODUCT_FETCH_FAILED = "Възникна грешка при извличане на продукта!"

# --- Client-side --------------------------------------------------------------

CLIENT_REQUEST_FAILED = "Възникна грешка при обработка на заявката!"


def field_too_long(field: str) -> str:
    """Length-limit message naming the field by its form label."""
    label = _FIELD_LABELS.get(field, field)
    return f"{label} е твърде дълго!"

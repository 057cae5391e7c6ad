"""Root conftest — shared test configuration."""

import os

# Tests never reach a real database or bucket
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("FIREBASE_STORAGE_BUCKET", "storefront-test.appspot.com")
os.environ.setdefault("LOG_FORMAT", "text")

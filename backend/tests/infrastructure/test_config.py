"""Settings — environment-driven configuration."""

from storefront.config import Settings


def test_postgres_url_gets_asyncpg_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/shop")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/shop"


def test_other_urls_left_untouched():
    settings = Settings(database_url="sqlite+aiosqlite:///:memory:")
    assert settings.database_url == "sqlite+aiosqlite:///:memory:"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("SEARCH_RESULT_LIMIT", "25")
    monkeypatch.setenv("CATEGORY_IMAGE_FOLDER", "shop/categories")
    settings = Settings()
    assert settings.search_result_limit == 25
    assert settings.category_image_folder == "shop/categories"

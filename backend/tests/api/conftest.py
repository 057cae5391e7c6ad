"""API test fixtures — async DB, fake image store, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db and get_image_store_provider dependencies overridden for each test
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection,
      so rows seeded through test_db are visible to the app
    - FakeImageStore records calls: tests assert "no upload happened" directly
"""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from storefront.db.base import Base
from storefront.infrastructure.database import get_db, DatabaseSessionManager
from storefront.infrastructure.image_store import get_image_store_provider
from storefront.models.category import Category
from storefront.models.product import Product
import storefront.infrastructure.database as db_module
from storefront.main import app


class FakeImageStore:
    """Records uploads/deletes; returns canonical URLs on a fake CDN host."""

    def __init__(self):
        self.uploads: list[dict] = []
        self.deleted: list[str] = []
        self.fail_upload: Exception | None = None
        self.fail_delete: Exception | None = None

    async def upload(self, source: str, folder: str) -> str:
        if self.fail_upload:
            raise self.fail_upload
        url = f"https://cdn.test/{folder}/img-{len(self.uploads) + 1}.png"
        self.uploads.append({"source": source, "folder": folder, "url": url})
        return url

    async def delete(self, url: str) -> bool:
        if self.fail_delete:
            raise self.fail_delete
        self.deleted.append(url)
        return True


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def image_store():
    return FakeImageStore()


@pytest.fixture
async def client(test_engine, test_session_factory, image_store):
    """FastAPI test client with DB and image store overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_store_provider] = lambda: (lambda: image_store)

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_category(test_db):
    """A committed 'Hats' / 'HAT' category."""
    category = Category(
        name="Hats", code="HAT", image_url="https://cdn.test/LIPCI/categories/hats.png",
    )
    test_db.add(category)
    await test_db.commit()
    return category


@pytest.fixture
async def seed_products(test_db):
    """A small catalog for search tests."""
    products = [
        Product(name="Red Lipstick", code="LIP-001", price=Decimal("19.90"), images=["https://cdn.test/p/lip1.png"]),
        Product(name="Lip Balm", code="BALM-7", price=Decimal("7.50"), images=[]),
        Product(name="Eyeliner", code="EYE-100", price=Decimal("12.00"), images=["https://cdn.test/p/eye.png"]),
        Product(name="100% Matte Powder", code="PWD-2", price=Decimal("25.00"), images=[]),
    ]
    test_db.add_all(products)
    await test_db.commit()
    return products

import pytest
from unittest.mock import MagicMock
from httpx import AsyncClient, ASGITransport

from catalog.auth import require_auth
from catalog.db.database import db
from catalog.deps import get_storage
from catalog.main import app
from catalog.services.storage_service import StorageService


@pytest.fixture
async def database(tmp_path):
    """Throwaway SQLite database per test."""
    await db.connect(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    await db.create_tables()
    yield db
    await db.disconnect()


@pytest.fixture
def bucket():
    """Mock GCS bucket; bucket.blob(path).delete is what the gateway calls."""
    return MagicMock()


@pytest.fixture
def storage(bucket):
    return StorageService(bucket)


@pytest.fixture
async def client(database, storage):
    """Async test client with real SQLite, mocked bucket and auth bypassed."""
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[require_auth] = lambda: {"sub": "tester"}

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def product_payload():
    return {
        "productName": "A",
        "oldPrice": 100,
        "offerPrice": 80,
        "categories": "x",
        "productCategoryId": 3,
        "productImage": "https://firebasestorage.googleapis.com/v0/b/shop/o/products%2Fa.png?alt=media",
    }

"""
Inventory Service — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── settings: Settings pointing at a temporary cache directory
    ├── photo_service / inventory_service: isolated service instances
    ├── app: FastAPI app built by create_app(settings)
    ├── test_client: HTTPX AsyncClient routed straight into the app
    └── sample_image_bytes: Fake image content for upload tests
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep a developer's .env or exported INVENTORY_* values out of the tests
os.environ["INVENTORY_LOG_LEVEL"] = "WARNING"

from inventory_app.config import Settings
from inventory_app.main import create_app
from inventory_app.services.inventory_service import InventoryService
from inventory_app.services.photo_service import PhotoService


@pytest.fixture
def cache_dir(tmp_path):
    """A fresh photo cache directory for each test."""
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def settings(cache_dir):
    return Settings(host="127.0.0.1", port=3000, cache_dir=str(cache_dir))


@pytest.fixture
def photo_service(cache_dir):
    return PhotoService(cache_dir, max_size=1024 * 1024)


@pytest.fixture
def inventory_service(photo_service):
    return InventoryService(photo_service)


@pytest.fixture
def sample_image_bytes():
    """
    Minimal JPEG bytes: Start of Image (FFD8) + JFIF marker + End of Image (FFD9).
    Not a real photograph, but enough for upload and download round trips.
    """
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/inventory")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

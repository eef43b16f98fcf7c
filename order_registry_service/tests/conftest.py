"""
Pytest configuration and fixtures for Order Registry Service tests.
"""

import asyncio
import os
from typing import Any, AsyncGenerator

import pytest
from fastapi.testclient import TestClient

# Set up test environment before importing the application
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("ORDER_DATABASE_URL", "sqlite+aiosqlite:///test.db")

from order_registry_service.app.core.database import OrderRegistryDatabaseManager
from order_registry_service.app.main import create_app


@pytest.fixture
def database_url(tmp_path) -> str:
    """A fresh SQLite database file per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}"


@pytest.fixture
async def db_session(database_url) -> AsyncGenerator[Any, None]:
    """Create a test database session on freshly created tables."""
    manager = OrderRegistryDatabaseManager(database_url=database_url)
    await manager.create_tables()
    async with manager.async_session_maker() as session:
        yield session
    await manager.close()


@pytest.fixture
def client(database_url) -> TestClient:
    """FastAPI test client backed by its own SQLite database."""

    async def prepare_tables() -> None:
        manager = OrderRegistryDatabaseManager(database_url=database_url)
        await manager.create_tables()
        await manager.close()

    asyncio.run(prepare_tables())

    app = create_app(
        database_manager=OrderRegistryDatabaseManager(database_url=database_url)
    )
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_order_payload():
    """Sample order payload in wire format."""
    return {
        "orderId": "101",
        "companyName": "SuperTrader",
        "customerAddress": "Steindamm 80",
        "orderedItem": "Macbook",
    }

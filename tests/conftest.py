"""Pytest fixtures for sales tracker tests."""

import os

# Keep the app's own engine off the working directory
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import salestracker.models  # noqa: F401  (registers tables)
from salestracker.database import Base
from salestracker.schemas.item import Item
from salestracker.schemas.order import Order
from salestracker.services.dashboard_service import DashboardService
from salestracker.services.item_service import ItemService
from salestracker.services.order_service import OrderService
from salestracker.stores.memory import InMemoryRecordStore

NOW = datetime(2024, 5, 15, 12, 0, 0)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock(now):
    """A clock frozen at ``now``."""
    return lambda: now


@pytest.fixture
def item_store():
    return InMemoryRecordStore[Item]()


@pytest.fixture
def order_store():
    return InMemoryRecordStore[Order]()


@pytest.fixture
def item_service(item_store, clock):
    return ItemService(item_store, clock=clock)


@pytest.fixture
def order_service(order_store, item_store, clock):
    return OrderService(order_store, item_store, clock=clock)


@pytest.fixture
def dashboard_service(order_store, item_store, clock):
    return DashboardService(order_store, item_store, clock=clock)


@pytest.fixture
def make_item(item_service):
    """Factory creating an item through the service; returns its ID."""

    async def _make_item(**overrides):
        data = {
            "name": "Widget",
            "cost": Decimal("10"),
            "sale_price": Decimal("15"),
            "current_quantity": 20,
        }
        data.update(overrides)
        return await item_service.create_item(Item(**data))

    return _make_item


@pytest.fixture
def make_order(order_service):
    """Factory creating an order through the service; returns its ID."""

    async def _make_order(item_id, **overrides):
        data = {
            "customer_name": "Jane Doe",
            "item_id": item_id,
            "sell_date": NOW,
            "quantity": 1,
        }
        data.update(overrides)
        return await order_service.create_order(Order(**data))

    return _make_order


@pytest.fixture
def db_session():
    """Session on a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()

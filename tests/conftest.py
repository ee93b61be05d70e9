"""Shared test fixtures and configuration."""
import pytest
import os
from decimal import Decimal

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CAFE_NAME", "Test Cafe")

from cafe.main import app
from cafe.db.database import get_db
from cafe.db.models import Base, MenuCategory, MenuItem, SizePricing
from cafe.services.menu.repository import MenuRepository
from cafe.services.ordering.service import OrderService
from cafe.services.persistence.orders import OrderPersistenceService


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_db(test_db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
async def sample_menu(test_db):
    """
    Seed a small catalog and return its menu items by key.

    - coffee: $5.00, no sizes, up to 3 extra shots
    - latte: $4.50, sizes small +0.00 / medium +1.00 / large +2.00, up to 2 shots
    - special: $6.00, unavailable
    - water: $0.50, size small -1.00 (prices below zero)
    - tea: $3.00, has sizes but no size pricing rows
    """
    category = MenuCategory(name="Coffee", description="Coffee drinks", sort_order=1)
    test_db.add(category)
    await test_db.flush()

    coffee = MenuItem(
        category_id=category.id,
        name="Test Coffee",
        base_price=Decimal("5.00"),
        has_milk_options=True,
        max_extra_shots=3,
        sort_order=1,
    )
    latte = MenuItem(
        category_id=category.id,
        name="Test Latte",
        base_price=Decimal("4.50"),
        has_size_options=True,
        has_milk_options=True,
        max_extra_shots=2,
        sort_order=2,
    )
    special = MenuItem(
        category_id=category.id,
        name="Seasonal Special",
        base_price=Decimal("6.00"),
        is_available=False,
        sort_order=3,
    )
    water = MenuItem(
        category_id=category.id,
        name="Sparkling Water",
        base_price=Decimal("0.50"),
        has_size_options=True,
        sort_order=4,
    )
    tea = MenuItem(
        category_id=category.id,
        name="Green Tea",
        base_price=Decimal("3.00"),
        has_size_options=True,
        sort_order=5,
    )
    test_db.add_all([coffee, latte, special, water, tea])
    await test_db.flush()

    test_db.add_all(
        [
            SizePricing(menu_item_id=latte.id, size="small", price_modifier=Decimal("0.00")),
            SizePricing(menu_item_id=latte.id, size="medium", price_modifier=Decimal("1.00")),
            SizePricing(menu_item_id=latte.id, size="large", price_modifier=Decimal("2.00")),
            SizePricing(menu_item_id=water.id, size="small", price_modifier=Decimal("-1.00")),
        ]
    )
    await test_db.commit()

    return {
        "category": category,
        "coffee": coffee,
        "latte": latte,
        "special": special,
        "water": water,
        "tea": tea,
    }


@pytest.fixture
def menu_repository(test_db):
    return MenuRepository(test_db)


@pytest.fixture
def order_service(test_db, menu_repository):
    """Order service with the default 10% tax and $0.75 shots."""
    return OrderService(
        menu_repository,
        OrderPersistenceService(test_db),
        tax_rate=Decimal("0.10"),
        extra_shot_price=Decimal("0.75"),
    )


@pytest.fixture
def override_get_db(test_db):
    """Override get_db dependency with test database."""
    async def _override_get_db():
        yield test_db
    return _override_get_db


@pytest.fixture
async def test_client(override_get_db):
    """Create an async API client with the test database wired in."""
    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Clear overrides
    app.dependency_overrides.clear()

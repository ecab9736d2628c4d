"""Shared fixtures for catalog tests.

Async fixtures run against a throwaway SQLite database file; API tests
seed the same schema synchronously before the application starts.
"""

from collections.abc import AsyncGenerator, Generator
from decimal import Decimal
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session

from catalog_api.catalog.models import Category, Product, Variant
from catalog_api.infrastructure.cache import CountCache
from catalog_api.infrastructure.config import Settings
from catalog_api.infrastructure.database import Base, create_session_factory
from catalog_api.main import create_app


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def build_catalog() -> list[Category]:
    """Build the standard test catalog.

    Products are created out of code order so that ID ordering, not code
    ordering, is what the listing tests observe.
    """
    clothing = Category(code="CLOTHING", name="Clothing")
    shoes = Category(code="SHOES", name="Shoes")
    accessories = Category(code="ACCESSORIES", name="Accessories")

    clothing.products = [
        Product(
            code="PROD001",
            price=Decimal("100.00"),
            variants=[
                Variant(sku="SKU001A", name="Variant A", price=Decimal("75.50")),
                Variant(sku="SKU001B", name="Variant B", price=Decimal("0.00")),
            ],
        ),
        Product(code="PROD003", price=Decimal("25.00")),
    ]
    shoes.products = [
        Product(
            code="PROD002",
            price=Decimal("50.00"),
            variants=[Variant(sku="SKU002A", name="Variant A", price=Decimal("150.00"))],
        ),
    ]
    accessories.products = [
        Product(code="PROD004", price=Decimal("10.00")),
    ]
    return [clothing, shoes, accessories]


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def counts(clock: FakeClock) -> CountCache:
    """Create a count cache driven by the fake clock."""
    return CountCache(clock=clock)


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create an async engine with the catalog schema."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine."""
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a test session."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_session(session: AsyncSession) -> AsyncSession:
    """Session over a database holding the standard test catalog."""
    session.add_all(build_catalog())
    await session.commit()
    return session


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """Create and seed a SQLite database for API tests.

    Returns:
        Async database URL for the application settings.
    """
    path = tmp_path / "api.db"
    sync_engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(sync_engine)
    with Session(sync_engine) as session:
        session.add_all(build_catalog())
        session.commit()
    sync_engine.dispose()
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def client(database_url: str) -> Generator[TestClient, None, None]:
    """Create test client with the application lifespan running."""
    app = create_app(Settings(database_url=database_url, log_json=False))
    with TestClient(app) as client:
        yield client

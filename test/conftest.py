"""
Pytest configuration and shared fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from smsdash.campaigns.models import Campaign
from smsdash.leads.models import Lead, LeadStatus
from smsdash.main import app
from smsdash.products.models import MessageTemplate, Product
from smsdash.shared.database import Base, get_db_session, get_session_factory
from smsdash.sms.dispatcher import get_campaign_dispatcher

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class RecordingDispatcher:
    """Stands in for CampaignDispatcher; records instead of sending."""

    def __init__(self) -> None:
        self.dispatched: list[UUID] = []

    async def dispatch(self, campaign_id: UUID) -> None:
        self.dispatched.append(campaign_id)


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[Any, None]:
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: Any) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest_asyncio.fixture
async def async_client(
    db_session: AsyncSession,
    session_factory: async_sessionmaker[AsyncSession],
    dispatcher: RecordingDispatcher,
) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API tests."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session
        await db_session.commit()

    app.dependency_overrides[get_db_session] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_campaign_dispatcher] = lambda: dispatcher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def product(db_session: AsyncSession) -> Product:
    """Product with a message template."""
    product = Product(name="Curso de Inglês")
    db_session.add(product)
    await db_session.flush()
    db_session.add(
        MessageTemplate(
            product_id=product.id,
            message="Olá {{name}}, use o cupom {{ code }}",
            variables=["name", "code"],
        )
    )
    await db_session.commit()
    return product


@pytest_asyncio.fixture
async def campaign(db_session: AsyncSession, product: Product) -> Campaign:
    """Campaign with three pending leads."""
    campaign = Campaign(product_id=product.id, name="Black Friday", total_leads=3, pending=3)
    db_session.add(campaign)
    await db_session.flush()
    for i, phone in enumerate(["5511999990001", "5511999990002", "5511999990003"]):
        db_session.add(
            Lead(
                campaign_id=campaign.id,
                fullphone=phone,
                message=f"Olá lead {i}",
                status=LeadStatus.PENDING.value,
                reference=f"REF-{i}",
            )
        )
    await db_session.commit()
    return campaign

"""
Tests for the HTML dashboard, admin and service endpoints.
"""

from collections.abc import AsyncGenerator
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.campaigns.models import Campaign
from smsdash.leads.models import Lead, LeadStatus
from smsdash.main import app
from smsdash.shared.database import DatabaseManager, get_database_manager


class TestDashboard:
    @pytest.mark.asyncio
    async def test_overview(self, async_client: AsyncClient, campaign: Campaign) -> None:
        response = await async_client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Black Friday" in response.text
        assert "Curso de Inglês" in response.text
        assert f"/campaigns/{campaign.id}" in response.text

    @pytest.mark.asyncio
    async def test_campaign_page(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        campaign: Campaign,
    ) -> None:
        lead = (
            await db_session.execute(select(Lead).where(Lead.reference == "REF-0"))
        ).scalar_one()
        lead.status = LeadStatus.DELIVERED.value
        lead.fullphone = "55119999999"
        lead.customer_name = "<script>alert(1)</script>"
        await db_session.commit()

        response = await async_client.get(f"/campaigns/{campaign.id}")

        assert response.status_code == 200
        assert "Entregue" in response.text
        assert "Pendente" in response.text
        assert "+55 11 9 9999-99" in response.text
        assert "<script>" not in response.text
        assert "&lt;script&gt;" in response.text

    @pytest.mark.asyncio
    async def test_campaign_page_not_found(self, async_client: AsyncClient) -> None:
        response = await async_client.get(f"/campaigns/{uuid4()}")

        assert response.status_code == 404


@pytest_asyncio.fixture
async def sqlite_manager() -> AsyncGenerator[DatabaseManager, None]:
    manager = DatabaseManager("sqlite+aiosqlite:///:memory:")
    app.dependency_overrides[get_database_manager] = lambda: manager
    yield manager
    await manager.close()


@pytest.mark.asyncio
async def test_migrate_creates_tables(async_client: AsyncClient, sqlite_manager: DatabaseManager) -> None:
    response = await async_client.post("/api/admin/migrate")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert {"products", "message_templates", "templates", "offers", "campaigns", "leads", "webhook_logs"} <= set(
        body["tables"]
    )

    # idempotent
    assert (await async_client.post("/api/admin/migrate")).status_code == 200


@pytest.mark.asyncio
async def test_health_and_request_id(async_client: AsyncClient) -> None:
    response = await async_client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.json() == {"status": "healthy"}
    assert response.headers["X-Request-ID"] == "req-123"

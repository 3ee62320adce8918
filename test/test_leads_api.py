"""
API integration tests for lead endpoints.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.campaigns.models import Campaign
from smsdash.leads.models import Lead, LeadStatus


async def _lead_ids(session: AsyncSession, campaign: Campaign) -> list[str]:
    result = await session.execute(
        select(Lead.id).where(Lead.campaign_id == campaign.id).order_by(Lead.fullphone)
    )
    return [str(lead_id) for lead_id in result.scalars().all()]


@pytest.mark.asyncio
async def test_list_leads(async_client: AsyncClient, campaign: Campaign) -> None:
    response = await async_client.get("/api/leads", params={"campaignId": str(campaign.id)})

    assert response.status_code == 200
    leads = response.json()["leads"]
    assert len(leads) == 3
    assert {lead["status"] for lead in leads} == {"pending"}


@pytest.mark.asyncio
async def test_list_requires_campaign_id(async_client: AsyncClient) -> None:
    response = await async_client.get("/api/leads")

    assert response.status_code == 400
    assert response.json()["error"] == "campaignId is required"


@pytest.mark.asyncio
async def test_bulk_delete_recomputes_counters(
    async_client: AsyncClient,
    db_session: AsyncSession,
    campaign: Campaign,
) -> None:
    lead_ids = await _lead_ids(db_session, campaign)
    # one delivered lead survives the delete
    survivor = (
        await db_session.execute(select(Lead).where(Lead.fullphone == "5511999990003"))
    ).scalar_one()
    survivor.status = LeadStatus.DELIVERED.value
    await db_session.commit()

    response = await async_client.post("/api/leads/bulk-delete", json={"leadIds": lead_ids[:2]})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "deleted": 2,
        "message": "2 leads deleted successfully",
    }

    detail = (await async_client.get(f"/api/campaigns/{campaign.id}")).json()["campaign"]
    assert (detail["total_leads"], detail["delivered"], detail["pending"]) == (1, 1, 0)
    assert detail["delivery_rate"] == 100


@pytest.mark.asyncio
async def test_bulk_delete_removes_emptied_campaign(
    async_client: AsyncClient,
    db_session: AsyncSession,
    campaign: Campaign,
) -> None:
    lead_ids = await _lead_ids(db_session, campaign)

    response = await async_client.post("/api/leads/bulk-delete", json={"leadIds": lead_ids})

    assert response.status_code == 200
    assert (await async_client.get(f"/api/campaigns/{campaign.id}")).status_code == 404


@pytest.mark.asyncio
async def test_bulk_delete_validation(async_client: AsyncClient) -> None:
    assert (await async_client.post("/api/leads/bulk-delete", json={"leadIds": []})).status_code == 422
    assert (
        await async_client.post("/api/leads/bulk-delete", json={"leadIds": ["not-a-uuid"]})
    ).status_code == 422

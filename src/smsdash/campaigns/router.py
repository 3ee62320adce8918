"""
Campaign API router.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.campaigns.repository import CampaignRepository
from smsdash.campaigns.schemas import (
    CampaignCreatedResponse,
    CampaignDetail,
    CampaignEnvelope,
    CampaignLeadsPayload,
    CampaignListResponse,
    CampaignResponse,
    CampaignSendResponse,
    ProductRef,
)
from smsdash.campaigns.service import CampaignService
from smsdash.leads.repository import LeadRepository
from smsdash.products.repository import ProductRepository
from smsdash.shared.database import get_db_session
from smsdash.shared.logging import get_logger
from smsdash.shared.schemas import DeleteResponse
from smsdash.sms.dispatcher import CampaignDispatcher, get_campaign_dispatcher

logger = get_logger(__name__)

router = APIRouter(prefix="/api/campaigns", tags=["campaigns"])


def get_campaign_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> CampaignService:
    """Dependency for campaign service."""
    return CampaignService(
        CampaignRepository(session),
        LeadRepository(session),
        ProductRepository(session),
    )


@router.get("", response_model=CampaignListResponse)
async def list_campaigns(
    service: Annotated[CampaignService, Depends(get_campaign_service)],
    product_id: Annotated[UUID | None, Query(alias="productId")] = None,
) -> CampaignListResponse:
    """List campaigns newest first, optionally filtered by product."""
    campaigns = await service.list_campaigns(product_id)
    return CampaignListResponse(campaigns=[CampaignResponse.model_validate(c) for c in campaigns])


@router.post(
    "",
    response_model=CampaignCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Product has no template"},
        404: {"description": "Product not found"},
    },
)
async def create_campaign(
    data: CampaignLeadsPayload,
    service: Annotated[CampaignService, Depends(get_campaign_service)],
) -> CampaignCreatedResponse:
    """Create a campaign with pending leads. Sending is a separate step."""
    campaign = await service.create_campaign(data, source="dashboard")
    return CampaignCreatedResponse(
        campaign_id=campaign.id,
        message=f"Campaign created with {len(data.leads)} leads",
    )


@router.get(
    "/{campaign_id}",
    response_model=CampaignEnvelope,
    responses={404: {"description": "Campaign not found"}},
)
async def get_campaign(
    campaign_id: UUID,
    service: Annotated[CampaignService, Depends(get_campaign_service)],
) -> CampaignEnvelope:
    campaign, product = await service.get_campaign_with_product(campaign_id)
    detail = CampaignDetail.model_validate(campaign)
    if product is not None:
        detail = detail.model_copy(update={"product": ProductRef.model_validate(product)})
    return CampaignEnvelope(campaign=detail)


@router.post(
    "/{campaign_id}/send",
    response_model=CampaignSendResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={404: {"description": "Campaign not found"}},
)
async def send_campaign(
    campaign_id: UUID,
    background_tasks: BackgroundTasks,
    service: Annotated[CampaignService, Depends(get_campaign_service)],
    dispatcher: Annotated[CampaignDispatcher, Depends(get_campaign_dispatcher)],
) -> CampaignSendResponse:
    """Queue the campaign's pending leads for sending."""
    pending = await service.pending_count(campaign_id)
    if pending:
        background_tasks.add_task(dispatcher.dispatch, campaign_id)
    logger.info("Campaign send requested", extra={"campaign_id": str(campaign_id), "pending": pending})
    return CampaignSendResponse(campaign_id=campaign_id, pending=pending)


@router.delete(
    "/{campaign_id}",
    response_model=DeleteResponse,
    responses={404: {"description": "Campaign not found"}},
)
async def delete_campaign(
    campaign_id: UUID,
    service: Annotated[CampaignService, Depends(get_campaign_service)],
) -> DeleteResponse:
    await service.delete_campaign(campaign_id)
    return DeleteResponse(message="Campaign deleted")

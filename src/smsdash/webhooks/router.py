"""
Inbound webhook router.

Lead ingestion (n8n, raw lead batches) and Dizparos delivery events.
"""

from typing import Annotated, Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.campaigns.repository import CampaignRepository
from smsdash.campaigns.schemas import CampaignLeadsPayload
from smsdash.campaigns.service import CampaignService
from smsdash.leads.repository import LeadRepository
from smsdash.leads.service import LeadService
from smsdash.products.repository import ProductRepository
from smsdash.shared.database import get_db_session
from smsdash.shared.logging import get_logger
from smsdash.sms.dispatcher import CampaignDispatcher, get_campaign_dispatcher
from smsdash.webhooks.dependencies import verify_webhook_token
from smsdash.webhooks.handler import DeliveryWebhookHandler
from smsdash.webhooks.schemas import (
    DizparosCallbackPayload,
    DizparosCallbackResponse,
    DizparosWebhookPayload,
    IngestedLead,
    IngestionResponse,
    LeadsIngestionResponse,
    WebhookAck,
)

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/webhooks",
    tags=["webhooks"],
    dependencies=[Depends(verify_webhook_token)],
)


def get_delivery_handler(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> DeliveryWebhookHandler:
    """Dependency for the delivery webhook handler."""
    return DeliveryWebhookHandler(session)


@router.post(
    "/n8n",
    response_model=IngestionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Product has no template"}},
)
async def n8n_webhook(
    data: CampaignLeadsPayload,
    background_tasks: BackgroundTasks,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    dispatcher: Annotated[CampaignDispatcher, Depends(get_campaign_dispatcher)],
) -> IngestionResponse:
    """Turn an n8n lead batch into a campaign and start sending it.

    The product is created on first sight; it must already have a template
    for the batch to be accepted.
    """
    service = CampaignService(
        CampaignRepository(session),
        LeadRepository(session),
        ProductRepository(session),
    )
    campaign = await service.create_campaign(data, source="n8n", create_product=True)
    logger.info(
        "n8n lead batch accepted",
        extra={"campaign_id": str(campaign.id), "leads": len(data.leads)},
    )

    # leads must be visible to the dispatcher's own session
    await session.commit()
    background_tasks.add_task(dispatcher.dispatch, campaign.id)

    lead_count = len(data.leads)
    return IngestionResponse(
        campaign_id=campaign.id,
        leads_count=lead_count,
        message=f"Campaign created with {lead_count} leads. SMS will be sent shortly.",
    )


@router.post(
    "/leads",
    response_model=LeadsIngestionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing or empty leads array"}},
)
async def leads_webhook(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    payload: Annotated[Any, Body()] = None,
) -> LeadsIngestionResponse:
    """Store a raw ``[{"body": {...}}]`` lead batch without a campaign."""
    leads, failed = await LeadService(session, LeadRepository(session)).ingest(payload)
    return LeadsIngestionResponse(
        created=len(leads),
        failed=failed,
        leads=[IngestedLead.model_validate(lead) for lead in leads],
    )


@router.post("/dizparos", response_model=WebhookAck)
async def dizparos_webhook(
    payload: DizparosWebhookPayload,
    handler: Annotated[DeliveryWebhookHandler, Depends(get_delivery_handler)],
) -> WebhookAck:
    """Receive a Dizparos delivery event. Redelivered events are acknowledged as-is."""
    await handler.handle_event(payload)
    return WebhookAck()


@router.post(
    "/dizparos/callback",
    response_model=DizparosCallbackResponse,
    responses={400: {"description": "Invalid payload"}, 404: {"description": "Lead not found"}},
)
async def dizparos_callback(
    payload: DizparosCallbackPayload,
    handler: Annotated[DeliveryWebhookHandler, Depends(get_delivery_handler)],
) -> DizparosCallbackResponse:
    lead = await handler.apply_callback(payload)
    return DizparosCallbackResponse(lead_id=lead.id, updated=True, new_status=lead.status)

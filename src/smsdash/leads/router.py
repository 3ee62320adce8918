"""
Lead API router.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.leads.repository import LeadRepository
from smsdash.leads.schemas import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    LeadListResponse,
    LeadResponse,
)
from smsdash.leads.service import LeadService
from smsdash.shared.database import get_db_session
from smsdash.shared.exceptions import ValidationError

router = APIRouter(prefix="/api/leads", tags=["leads"])


def get_lead_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> LeadService:
    """Dependency for lead service."""
    return LeadService(session, LeadRepository(session))


@router.get(
    "",
    response_model=LeadListResponse,
    responses={400: {"description": "campaignId is required"}},
)
async def list_leads(
    service: Annotated[LeadService, Depends(get_lead_service)],
    campaign_id: Annotated[UUID | None, Query(alias="campaignId")] = None,
) -> LeadListResponse:
    if campaign_id is None:
        raise ValidationError("campaignId is required", "MISSING_FIELD", {"field": "campaignId"})
    leads = await service.list_leads(campaign_id)
    return LeadListResponse(leads=[LeadResponse.model_validate(lead) for lead in leads])


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_leads(
    data: BulkDeleteRequest,
    service: Annotated[LeadService, Depends(get_lead_service)],
) -> BulkDeleteResponse:
    deleted = await service.bulk_delete(data.lead_ids)
    return BulkDeleteResponse(deleted=deleted, message=f"{deleted} leads deleted successfully")

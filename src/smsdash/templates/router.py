"""
Saved template API router.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.shared.database import get_db_session
from smsdash.shared.schemas import DeleteResponse
from smsdash.templates.repository import TemplateRepository
from smsdash.templates.schemas import (
    TemplateEnvelope,
    TemplateListResponse,
    TemplateResponse,
    TemplateWrite,
)
from smsdash.templates.service import TemplateService

router = APIRouter(prefix="/api/templates", tags=["templates"])


def get_template_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> TemplateService:
    """Dependency for saved template service."""
    return TemplateService(TemplateRepository(session))


@router.get("", response_model=TemplateListResponse)
async def list_templates(
    service: Annotated[TemplateService, Depends(get_template_service)],
) -> TemplateListResponse:
    templates = await service.list_templates()
    return TemplateListResponse(templates=[TemplateResponse.model_validate(t) for t in templates])


@router.post("", response_model=TemplateEnvelope, status_code=status.HTTP_201_CREATED)
async def create_template(
    data: TemplateWrite,
    service: Annotated[TemplateService, Depends(get_template_service)],
) -> TemplateEnvelope:
    template = await service.create_template(data)
    return TemplateEnvelope(template=TemplateResponse.model_validate(template))


@router.put("/{template_id}", response_model=TemplateEnvelope)
async def update_template(
    template_id: UUID,
    data: TemplateWrite,
    service: Annotated[TemplateService, Depends(get_template_service)],
) -> TemplateEnvelope:
    template = await service.update_template(template_id, data)
    return TemplateEnvelope(template=TemplateResponse.model_validate(template))


@router.delete("/{template_id}", response_model=DeleteResponse)
async def delete_template(
    template_id: UUID,
    service: Annotated[TemplateService, Depends(get_template_service)],
) -> DeleteResponse:
    await service.delete_template(template_id)
    return DeleteResponse(message="Template deleted")

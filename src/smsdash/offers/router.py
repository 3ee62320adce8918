"""
Offer API router.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.offers.repository import OfferRepository
from smsdash.offers.schemas import OfferEnvelope, OfferListResponse, OfferResponse, OfferWrite
from smsdash.offers.service import OfferService
from smsdash.shared.database import get_db_session
from smsdash.shared.schemas import DeleteResponse

router = APIRouter(prefix="/api/offers", tags=["offers"])


def get_offer_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> OfferService:
    """Dependency for offer service."""
    return OfferService(OfferRepository(session))


@router.get("", response_model=OfferListResponse)
async def list_offers(
    service: Annotated[OfferService, Depends(get_offer_service)],
) -> OfferListResponse:
    offers = await service.list_offers()
    return OfferListResponse(offers=[OfferResponse.model_validate(o) for o in offers])


@router.post("", response_model=OfferEnvelope, status_code=status.HTTP_201_CREATED)
async def create_offer(
    data: OfferWrite,
    service: Annotated[OfferService, Depends(get_offer_service)],
) -> OfferEnvelope:
    offer = await service.create_offer(data.name)
    return OfferEnvelope(offer=OfferResponse.model_validate(offer))


@router.put("/{offer_id}", response_model=OfferEnvelope)
async def update_offer(
    offer_id: UUID,
    data: OfferWrite,
    service: Annotated[OfferService, Depends(get_offer_service)],
) -> OfferEnvelope:
    offer = await service.rename_offer(offer_id, data.name)
    return OfferEnvelope(offer=OfferResponse.model_validate(offer))


@router.delete("/{offer_id}", response_model=DeleteResponse)
async def delete_offer(
    offer_id: UUID,
    service: Annotated[OfferService, Depends(get_offer_service)],
) -> DeleteResponse:
    await service.delete_offer(offer_id)
    return DeleteResponse(message="Offer deleted")

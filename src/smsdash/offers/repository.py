from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.offers.models import Offer


class OfferRepository:
    """Repository for offer database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_offers(self) -> list[Offer]:
        result = await self._session.execute(select(Offer).order_by(Offer.created_at.desc()))
        return list(result.scalars().all())

    async def get_by_id(self, offer_id: UUID) -> Offer | None:
        result = await self._session.execute(select(Offer).where(Offer.id == offer_id))
        return result.scalar_one_or_none()

    async def create(self, offer: Offer) -> Offer:
        self._session.add(offer)
        await self._session.flush()
        await self._session.refresh(offer)
        return offer

    async def update(self, offer: Offer) -> Offer:
        await self._session.flush()
        await self._session.refresh(offer)
        return offer

    async def delete(self, offer_id: UUID) -> int:
        result = await self._session.execute(delete(Offer).where(Offer.id == offer_id))
        return result.rowcount or 0

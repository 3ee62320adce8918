from uuid import UUID

from smsdash.offers.models import Offer
from smsdash.offers.repository import OfferRepository
from smsdash.shared.exceptions import OfferNotFoundError
from smsdash.shared.logging import get_logger
from smsdash.shared.validation import required_text

logger = get_logger(__name__)


class OfferService:
    def __init__(self, repository: OfferRepository) -> None:
        self._repository = repository

    async def list_offers(self) -> list[Offer]:
        return await self._repository.list_offers()

    async def create_offer(self, name: str | None) -> Offer:
        offer = await self._repository.create(Offer(name=required_text(name, "name")))
        logger.info("Offer created", extra={"offer_id": str(offer.id)})
        return offer

    async def rename_offer(self, offer_id: UUID, name: str | None) -> Offer:
        new_name = required_text(name, "name")
        offer = await self._repository.get_by_id(offer_id)
        if offer is None:
            raise OfferNotFoundError(offer_id)
        offer.name = new_name
        return await self._repository.update(offer)

    async def delete_offer(self, offer_id: UUID) -> None:
        if not await self._repository.delete(offer_id):
            raise OfferNotFoundError(offer_id)
        logger.info("Offer deleted", extra={"offer_id": str(offer_id)})

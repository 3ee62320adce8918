"""
Campaign service for business logic.
"""

from typing import Any
from uuid import UUID

from smsdash.campaigns.models import Campaign
from smsdash.campaigns.repository import CampaignRepository
from smsdash.campaigns.schemas import CampaignLeadsPayload, LeadInput
from smsdash.leads.models import Lead, LeadStatus
from smsdash.leads.repository import LeadRepository
from smsdash.products.models import Product
from smsdash.products.repository import ProductRepository
from smsdash.shared.exceptions import CampaignNotFoundError, ProductNotFoundError, ValidationError
from smsdash.shared.formatting import normalize_brazilian_phone
from smsdash.shared.interpolation import interpolate_message
from smsdash.shared.logging import get_logger

logger = get_logger(__name__)

_NAME_KEYS = ("customer_name", "first_name", "name")


def _customer_name(variables: dict[str, Any]) -> str | None:
    for key in _NAME_KEYS:
        value = variables.get(key)
        if value:
            return str(value)
    return None


class CampaignService:
    """Service for campaign business logic."""

    def __init__(
        self,
        repository: CampaignRepository,
        lead_repository: LeadRepository,
        product_repository: ProductRepository,
    ) -> None:
        self._repository = repository
        self._leads = lead_repository
        self._products = product_repository

    async def list_campaigns(self, product_id: UUID | None = None) -> list[Campaign]:
        return await self._repository.list_campaigns(product_id)

    async def get_campaign(self, campaign_id: UUID) -> Campaign:
        campaign = await self._repository.get_by_id(campaign_id)
        if campaign is None:
            raise CampaignNotFoundError(campaign_id)
        return campaign

    async def get_campaign_with_product(self, campaign_id: UUID) -> tuple[Campaign, Product | None]:
        campaign = await self.get_campaign(campaign_id)
        product = await self._products.get_by_id(campaign.product_id)
        return campaign, product

    async def create_campaign(
        self,
        payload: CampaignLeadsPayload,
        source: str,
        create_product: bool = False,
    ) -> Campaign:
        """Create a campaign and its pending leads from a lead batch.

        Each lead's message is the product template rendered with the lead's
        own fields; phones are normalized to the 55 country code. Nothing is
        sent here.

        Args:
            payload: Campaign name, product name and leads.
            source: Recorded in the campaign metadata (``dashboard``, ``n8n``).
            create_product: Create the product when it does not exist yet.

        Returns:
            The created campaign.

        Raises:
            ProductNotFoundError: Product is unknown and create_product is False.
            ValidationError: Product has no message template.
        """
        product = await self._products.get_by_name(payload.product_name)
        if product is None:
            if not create_product:
                raise ProductNotFoundError(payload.product_name)
            product = await self._products.create(Product(name=payload.product_name))
            logger.info(
                "Product auto-created",
                extra={"product_id": str(product.id), "product_name": product.name},
            )

        template = await self._products.get_template(product.id)
        if template is None:
            raise ValidationError(
                f'No template configured for product "{payload.product_name}"',
                "TEMPLATE_MISSING",
                {"product": payload.product_name},
            )

        lead_count = len(payload.leads)
        campaign = await self._repository.create(
            Campaign(
                product_id=product.id,
                name=payload.campaign_name,
                total_leads=lead_count,
                pending=lead_count,
                extra_metadata={"source": source},
            )
        )

        await self._leads.add_many(
            [self._build_lead(campaign.id, template.message, lead) for lead in payload.leads]
        )

        logger.info(
            "Campaign created",
            extra={
                "campaign_id": str(campaign.id),
                "product_id": str(product.id),
                "leads": lead_count,
                "source": source,
            },
        )
        return campaign

    @staticmethod
    def _build_lead(campaign_id: UUID, template: str, lead: LeadInput) -> Lead:
        variables = lead.model_dump()
        return Lead(
            campaign_id=campaign_id,
            fullphone=normalize_brazilian_phone(lead.phone),
            message=interpolate_message(template, variables),
            status=LeadStatus.PENDING.value,
            customer_name=_customer_name(variables),
            variables=variables,
        )

    async def pending_count(self, campaign_id: UUID) -> int:
        """Number of leads a dispatch of this campaign would send."""
        await self.get_campaign(campaign_id)
        return await self._leads.count_pending(campaign_id)

    async def delete_campaign(self, campaign_id: UUID) -> None:
        campaign = await self.get_campaign(campaign_id)
        await self._repository.delete(campaign)
        logger.info("Campaign deleted", extra={"campaign_id": str(campaign_id)})

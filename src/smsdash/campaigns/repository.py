"""
Campaign repository for database operations.
"""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.campaigns.models import Campaign
from smsdash.leads.models import Lead
from smsdash.shared.logging import get_logger

logger = get_logger(__name__)


class CampaignRepository:
    """Repository for campaign database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session.
        """
        self._session = session

    async def list_campaigns(self, product_id: UUID | None = None) -> list[Campaign]:
        """List campaigns newest first, optionally for a single product.

        Args:
            product_id: Optional product filter.

        Returns:
            List of campaigns.
        """
        stmt = select(Campaign).order_by(Campaign.created_at.desc())
        if product_id is not None:
            stmt = stmt.where(Campaign.product_id == product_id)
        result = await self._session.execute(stmt.execution_options(populate_existing=True))
        return list(result.scalars().all())

    async def get_by_id(self, campaign_id: UUID) -> Campaign | None:
        """Get a campaign by ID.

        Args:
            campaign_id: Campaign UUID.

        Returns:
            Campaign if found, None otherwise.
        """
        stmt = (
            select(Campaign)
            .where(Campaign.id == campaign_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_by_product(self, product_id: UUID) -> int:
        stmt = select(func.count()).select_from(Campaign).where(Campaign.product_id == product_id)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def create(self, campaign: Campaign) -> Campaign:
        """Create a new campaign."""
        self._session.add(campaign)
        await self._session.flush()
        await self._session.refresh(campaign)
        logger.info(
            "Created campaign",
            extra={"campaign_id": str(campaign.id), "product_id": str(campaign.product_id)},
        )
        return campaign

    async def update(self, campaign: Campaign) -> Campaign:
        await self._session.flush()
        return campaign

    async def delete(self, campaign: Campaign) -> None:
        """Delete a campaign and every lead it owns."""
        await self._session.execute(
            delete(Lead)
            .where(Lead.campaign_id == campaign.id)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.execute(delete(Campaign).where(Campaign.id == campaign.id))
        self._session.expunge(campaign)
        logger.info("Deleted campaign", extra={"campaign_id": str(campaign.id)})

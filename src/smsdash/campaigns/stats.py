"""
Campaign counter recomputation.

Counters on the campaign row are never incremented in place: after any lead
mutation they are rebuilt from a fresh count of the campaign's lead statuses.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.campaigns.models import Campaign
from smsdash.campaigns.repository import CampaignRepository
from smsdash.leads.models import LeadStatus
from smsdash.leads.repository import LeadRepository
from smsdash.shared.logging import get_logger

logger = get_logger(__name__)


async def recompute_campaign_stats(
    session: AsyncSession,
    campaign_id: UUID,
    delete_if_empty: bool = False,
) -> Campaign | None:
    """Rewrite a campaign's counters from its current leads.

    Args:
        session: Async database session; pending lead changes are flushed first.
        campaign_id: Campaign to recompute.
        delete_if_empty: Delete the campaign instead when it has no leads left.

    Returns:
        The updated campaign, or None when it does not exist or was deleted.
    """
    await session.flush()

    campaigns = CampaignRepository(session)
    campaign = await campaigns.get_by_id(campaign_id)
    if campaign is None:
        logger.warning("Stats requested for unknown campaign", extra={"campaign_id": str(campaign_id)})
        return None

    counts = await LeadRepository(session).count_statuses(campaign_id)
    total = sum(counts.values())

    if total == 0 and delete_if_empty:
        await campaigns.delete(campaign)
        logger.info("Deleted empty campaign", extra={"campaign_id": str(campaign_id)})
        return None

    campaign.total_leads = total
    campaign.delivered = counts.get(LeadStatus.DELIVERED.value, 0)
    campaign.failed = counts.get(LeadStatus.FAILED.value, 0)
    campaign.pending = counts.get(LeadStatus.PENDING.value, 0) + counts.get(LeadStatus.SENDING.value, 0)
    campaign.sent = counts.get(LeadStatus.SENT.value, 0)
    await campaigns.update(campaign)

    logger.debug(
        "Campaign stats recomputed",
        extra={
            "campaign_id": str(campaign_id),
            "total_leads": campaign.total_leads,
            "delivered": campaign.delivered,
            "failed": campaign.failed,
            "pending": campaign.pending,
            "sent": campaign.sent,
        },
    )
    return campaign

"""
Lead service for business logic.
"""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.campaigns.stats import recompute_campaign_stats
from smsdash.leads.models import Lead, LeadStatus
from smsdash.leads.repository import LeadRepository
from smsdash.shared.exceptions import ValidationError
from smsdash.shared.formatting import MAX_PHONE_LENGTH, normalize_brazilian_phone
from smsdash.shared.logging import get_logger

logger = get_logger(__name__)


class LeadService:
    """Service for lead listing and bulk removal."""

    def __init__(self, session: AsyncSession, repository: LeadRepository) -> None:
        self._session = session
        self._repository = repository

    async def list_leads(self, campaign_id: UUID) -> list[Lead]:
        return await self._repository.list_by_campaign(campaign_id)

    async def bulk_delete(self, lead_ids: Sequence[UUID]) -> int:
        """Delete leads and refresh the counters of every campaign they belonged to.

        Campaigns left without leads are deleted.

        Returns:
            Number of leads requested for deletion.
        """
        campaign_ids = await self._repository.campaign_ids_for(lead_ids)
        deleted = await self._repository.delete_many(lead_ids)

        for campaign_id in campaign_ids:
            await recompute_campaign_stats(self._session, campaign_id, delete_if_empty=True)

        logger.info(
            "Leads bulk deleted",
            extra={
                "requested": len(lead_ids),
                "deleted": deleted,
                "campaigns": [str(c) for c in campaign_ids],
            },
        )
        return len(lead_ids)

    async def ingest(self, items: Any) -> tuple[list[Lead], int]:
        """Store raw ``[{"body": {...}}]`` lead items as un-campaigned pending leads.

        Items without a usable phone are skipped and counted as failed.

        Returns:
            Tuple of (created leads, failed count).

        Raises:
            ValidationError: ``items`` is not a non-empty list.
        """
        if not isinstance(items, list) or not items:
            raise ValidationError("Missing or empty leads array", "EMPTY_LEADS")

        leads: list[Lead] = []
        failed = 0
        for item in items:
            body = item.get("body") if isinstance(item, dict) else None
            phone = body.get("phone") if isinstance(body, dict) else None
            fullphone = normalize_brazilian_phone(str(phone)) if phone else ""
            if not fullphone or len(fullphone) > MAX_PHONE_LENGTH:
                failed += 1
                continue
            leads.append(
                Lead(
                    campaign_id=None,
                    fullphone=fullphone,
                    status=LeadStatus.PENDING.value,
                    customer_name=body.get("first_name"),
                    variables=body,
                )
            )

        if leads:
            await self._repository.add_many(leads)
        logger.info("Leads ingested", extra={"created": len(leads), "failed": failed})
        return leads, failed

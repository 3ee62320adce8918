"""
Lead repository for database operations.
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.leads.models import Lead, LeadStatus
from smsdash.shared.logging import get_logger

logger = get_logger(__name__)


class LeadRepository:
    """Repository for lead database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session.
        """
        self._session = session

    async def list_by_campaign(self, campaign_id: UUID) -> list[Lead]:
        """List the leads of a campaign, newest first."""
        stmt = (
            select(Lead)
            .where(Lead.campaign_id == campaign_id)
            .order_by(Lead.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def claim_pending(self, campaign_id: UUID) -> list[Lead]:
        """Move a campaign's pending leads to ``sending`` and return them.

        Rows locked by a concurrent claim are skipped, and the status guard on
        the update keeps a lead from being claimed twice. The caller commits.

        Args:
            campaign_id: Campaign whose leads are claimed.

        Returns:
            The claimed leads, oldest first.
        """
        candidates = (
            select(Lead.id)
            .where(Lead.campaign_id == campaign_id)
            .where(Lead.status == LeadStatus.PENDING.value)
            .order_by(Lead.created_at)
            .with_for_update(skip_locked=True)
        )
        lead_ids = list((await self._session.execute(candidates)).scalars().all())
        if not lead_ids:
            return []

        claim = (
            update(Lead)
            .where(Lead.id.in_(lead_ids))
            .where(Lead.status == LeadStatus.PENDING.value)
            .values(status=LeadStatus.SENDING.value)
            .returning(Lead.id)
            .execution_options(synchronize_session=False)
        )
        claimed_ids = list((await self._session.execute(claim)).scalars().all())
        if not claimed_ids:
            return []

        stmt = (
            select(Lead)
            .where(Lead.id.in_(claimed_ids))
            .order_by(Lead.created_at)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count_pending(self, campaign_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(Lead)
            .where(Lead.campaign_id == campaign_id)
            .where(Lead.status == LeadStatus.PENDING.value)
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def get_by_reference(self, reference: str) -> Lead | None:
        """Get the lead a provider message reference belongs to.

        Args:
            reference: Provider-side message identifier.

        Returns:
            Lead if found, None otherwise.
        """
        stmt = select(Lead).where(Lead.reference == reference).limit(1)
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def add_many(self, leads: Sequence[Lead]) -> list[Lead]:
        """Insert a batch of leads."""
        self._session.add_all(leads)
        await self._session.flush()
        logger.info("Created leads", extra={"count": len(leads)})
        return list(leads)

    async def update(self, lead: Lead) -> Lead:
        await self._session.flush()
        return lead

    async def campaign_ids_for(self, lead_ids: Sequence[UUID]) -> set[UUID]:
        """Distinct campaigns the given leads belong to."""
        stmt = (
            select(Lead.campaign_id)
            .where(Lead.id.in_(lead_ids))
            .where(Lead.campaign_id.is_not(None))
            .distinct()
        )
        result = await self._session.execute(stmt)
        return set(result.scalars().all())

    async def delete_many(self, lead_ids: Sequence[UUID]) -> int:
        """Delete leads by id.

        Returns:
            Number of rows deleted.
        """
        result = await self._session.execute(
            delete(Lead).where(Lead.id.in_(lead_ids)).execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

    async def count_statuses(self, campaign_id: UUID) -> dict[str, int]:
        """Count the leads of a campaign per status."""
        stmt = (
            select(Lead.status, func.count())
            .where(Lead.campaign_id == campaign_id)
            .group_by(Lead.status)
        )
        result = await self._session.execute(stmt)
        return {status: int(count) for status, count in result.all()}

"""
Campaign dispatch: hand a campaign's pending leads to the SMS provider.
"""

import asyncio
from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from smsdash.campaigns.stats import recompute_campaign_stats
from smsdash.leads.models import Lead, LeadStatus
from smsdash.leads.repository import LeadRepository
from smsdash.shared.database import get_session_factory, utcnow
from smsdash.shared.logging import get_logger
from smsdash.sms.factory import get_sms_config, get_sms_provider
from smsdash.sms.interface import SmsProvider, SmsProviderError, SmsSendRequest

logger = get_logger(__name__)

SENT_DESCRIPTION = "SMS sent to provider"
# status_description column width
_DESCRIPTION_MAX = 100


@dataclass(frozen=True)
class DispatchResult:
    campaign_id: UUID
    sent: int
    failed: int


class CampaignDispatcher:
    """Sends the pending leads of a campaign with bounded concurrency.

    Runs outside the request (FastAPI background task) and therefore opens
    its own session from the shared session factory.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        provider: SmsProvider,
        max_concurrent: int = 10,
    ) -> None:
        self._session_factory = session_factory
        self._provider = provider
        self._max_concurrent = max(1, max_concurrent)

    async def dispatch(self, campaign_id: UUID) -> DispatchResult | None:
        """Send every pending lead, record the outcomes, refresh counters.

        Never raises: failures are logged and None is returned.
        """
        try:
            return await self._dispatch(campaign_id)
        except Exception:
            logger.exception("Campaign dispatch failed", extra={"campaign_id": str(campaign_id)})
            return None

    async def _dispatch(self, campaign_id: UUID) -> DispatchResult:
        async with self._session_factory() as session:
            leads = await LeadRepository(session).claim_pending(campaign_id)
            if not leads:
                logger.info("No pending leads to send", extra={"campaign_id": str(campaign_id)})
                return DispatchResult(campaign_id=campaign_id, sent=0, failed=0)
            # release the row locks before talking to the provider
            await session.commit()

            logger.info(
                "Dispatching campaign",
                extra={"campaign_id": str(campaign_id), "leads": len(leads)},
            )

            semaphore = asyncio.Semaphore(self._max_concurrent)
            outcomes = await asyncio.gather(*(self._send_one(lead, semaphore) for lead in leads))

            sent = failed = 0
            for lead, reference, error in outcomes:
                if error is None:
                    lead.status = LeadStatus.SENT.value
                    lead.reference = reference
                    lead.status_description = SENT_DESCRIPTION
                    sent += 1
                else:
                    lead.status = LeadStatus.FAILED.value
                    lead.status_description = error[:_DESCRIPTION_MAX]
                    lead.failed_at = utcnow()
                    failed += 1

            await recompute_campaign_stats(session, campaign_id)
            await session.commit()

        logger.info(
            "Campaign dispatched",
            extra={"campaign_id": str(campaign_id), "sent": sent, "failed": failed},
        )
        return DispatchResult(campaign_id=campaign_id, sent=sent, failed=failed)

    async def _send_one(
        self,
        lead: Lead,
        semaphore: asyncio.Semaphore,
    ) -> tuple[Lead, str | None, str | None]:
        """Send one lead; every error becomes a failed outcome for that lead."""
        request = SmsSendRequest(to=lead.fullphone, message=lead.message, lead_id=lead.id)
        async with semaphore:
            try:
                response = await self._provider.send_sms(request)
            except SmsProviderError as e:
                logger.warning(
                    "SMS send failed",
                    extra={"lead_id": str(lead.id), "error": str(e), "error_code": e.error_code},
                )
                return lead, None, str(e)
            except Exception as e:
                logger.exception("Unexpected error sending SMS", extra={"lead_id": str(lead.id)})
                return lead, None, str(e) or type(e).__name__
        return lead, response.reference, None


def get_campaign_dispatcher(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> CampaignDispatcher:
    """Dependency for the campaign dispatcher."""
    return CampaignDispatcher(
        session_factory,
        get_sms_provider(),
        get_sms_config().max_concurrent_sends,
    )

"""
Delivery webhook handler for provider status events.

Every Dizparos event is written to ``webhook_logs`` before it is applied;
the unique ``webhook_event_id`` makes redelivered events no-ops.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.campaigns.stats import recompute_campaign_stats
from smsdash.leads.models import Lead, LeadStatus
from smsdash.leads.repository import LeadRepository
from smsdash.shared.database import utcnow
from smsdash.shared.exceptions import LeadNotFoundError, ValidationError
from smsdash.shared.logging import get_logger
from smsdash.webhooks.events import EventCategory, categorize, lead_status_for
from smsdash.webhooks.models import WebhookLog
from smsdash.webhooks.repository import WebhookLogRepository
from smsdash.webhooks.schemas import DizparosCallbackPayload, DizparosWebhookPayload

logger = get_logger(__name__)

REPLY_DESCRIPTION = "Lead replied to SMS"
CALLBACK_STATUSES = (LeadStatus.DELIVERED, LeadStatus.FAILED, LeadStatus.REPLIED)
# status_description column width
_DESCRIPTION_MAX = 100


class DeliveryWebhookHandler:
    """Applies provider delivery events to leads and campaign counters."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize webhook handler.

        Args:
            session: Async database session.
        """
        self._session = session
        self._logs = WebhookLogRepository(session)
        self._leads = LeadRepository(session)

    async def handle_event(self, payload: DizparosWebhookPayload) -> bool:
        """Log and apply one delivery event.

        Args:
            payload: Parsed Dizparos webhook body.

        Returns:
            True if the event was processed, False if it was a duplicate.
        """
        if await self._logs.get_by_event_id(payload.webhook_event_id) is not None:
            logger.info(
                "Duplicate webhook skipped",
                extra={"webhook_event_id": payload.webhook_event_id, "type": payload.type},
            )
            return False

        try:
            log = await self._logs.create(
                WebhookLog(
                    webhook_event_id=payload.webhook_event_id,
                    type=payload.type,
                    type_description=payload.type_description[:_DESCRIPTION_MAX],
                    attempts=payload.attempts or 1,
                    payload=payload.data,
                )
            )
        except IntegrityError:
            # concurrent delivery of the same event won the insert
            await self._session.rollback()
            logger.info(
                "Duplicate webhook skipped (concurrent)",
                extra={"webhook_event_id": payload.webhook_event_id},
            )
            return False

        category = categorize(payload.type)
        logger.info(
            "Processing delivery webhook",
            extra={
                "webhook_event_id": payload.webhook_event_id,
                "type": payload.type,
                "category": category.value,
            },
        )

        match category:
            case EventCategory.STATUS | EventCategory.INVALID:
                await self._handle_status(payload)
            case EventCategory.REPLY:
                await self._handle_reply(payload)
            case EventCategory.HOMOLOGATION:
                # campaign level; nothing to apply per lead
                logger.warning(
                    "Campaign rejected by homologation",
                    extra={"webhook_event_id": payload.webhook_event_id, "data": payload.data},
                )
            case EventCategory.UNKNOWN:
                logger.warning(
                    "Unknown webhook type ignored",
                    extra={"webhook_event_id": payload.webhook_event_id, "type": payload.type},
                )

        await self._logs.mark_processed(log)
        await self._session.commit()
        return True

    async def _find_lead(self, reference: Any, payload: DizparosWebhookPayload) -> Lead | None:
        lead = await self._leads.get_by_reference(str(reference)) if reference else None
        if lead is None:
            logger.warning(
                "Lead not found for webhook",
                extra={"webhook_event_id": payload.webhook_event_id, "reference": reference},
            )
        return lead

    async def _handle_status(self, payload: DizparosWebhookPayload) -> None:
        lead = await self._find_lead(payload.data.get("reference"), payload)
        if lead is None:
            return

        new_status = lead_status_for(payload.type)
        lead.status = new_status.value
        lead.status_code = payload.type
        lead.status_description = payload.type_description[:_DESCRIPTION_MAX]
        if new_status == LeadStatus.DELIVERED:
            lead.delivered_at = utcnow()
        elif new_status == LeadStatus.FAILED:
            lead.failed_at = utcnow()
        await self._leads.update(lead)

        if lead.campaign_id is not None:
            await recompute_campaign_stats(self._session, lead.campaign_id)

    async def _handle_reply(self, payload: DizparosWebhookPayload) -> None:
        lead = await self._find_lead(payload.data.get("sms_msg_id"), payload)
        if lead is None:
            return

        reply = payload.data.get("reply")
        lead.status = LeadStatus.REPLIED.value
        lead.status_code = payload.type
        lead.reply = str(reply) if reply is not None else None
        lead.status_description = REPLY_DESCRIPTION
        await self._leads.update(lead)

        if lead.campaign_id is not None:
            await recompute_campaign_stats(self._session, lead.campaign_id)

    async def apply_callback(self, payload: DizparosCallbackPayload) -> Lead:
        """Apply a simplified status callback to the lead with that reference.

        Raises:
            ValidationError: Missing fields or unsupported status.
            LeadNotFoundError: No lead carries the reference.
        """
        if not payload.dizparos_id or not payload.phone or not payload.status:
            raise ValidationError(
                "Missing required fields: dizparos_id, phone, status",
                "MISSING_FIELD",
            )
        try:
            new_status = LeadStatus(payload.status)
        except ValueError:
            new_status = None
        if new_status not in CALLBACK_STATUSES:
            raise ValidationError(
                "Invalid status. Must be: delivered, failed, or replied",
                "INVALID_STATUS",
                {"status": payload.status},
            )

        lead = await self._leads.get_by_reference(payload.dizparos_id)
        if lead is None:
            logger.warning("Lead not found for callback", extra={"reference": payload.dizparos_id})
            raise LeadNotFoundError(payload.dizparos_id)

        lead.status = new_status.value
        if new_status == LeadStatus.DELIVERED:
            lead.delivered_at = utcnow()
        elif new_status == LeadStatus.FAILED:
            lead.failed_at = utcnow()
            lead.reply = payload.error_message or "Send failed"
        else:
            lead.reply = payload.error_message or "Reply received"
        await self._leads.update(lead)

        if lead.campaign_id is not None:
            await recompute_campaign_stats(self._session, lead.campaign_id)

        await self._session.commit()
        logger.info("Lead updated from callback", extra={"lead_id": str(lead.id), "status": lead.status})
        return lead

"""
Webhook log repository.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.webhooks.models import WebhookLog


class WebhookLogRepository:
    """Repository for the delivery webhook log."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_event_id(self, webhook_event_id: str) -> WebhookLog | None:
        result = await self._session.execute(
            select(WebhookLog).where(WebhookLog.webhook_event_id == webhook_event_id)
        )
        return result.scalar_one_or_none()

    async def create(self, log: WebhookLog) -> WebhookLog:
        self._session.add(log)
        await self._session.flush()
        return log

    async def mark_processed(self, log: WebhookLog) -> None:
        log.processed = True
        await self._session.flush()

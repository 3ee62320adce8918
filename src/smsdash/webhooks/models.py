"""
SQLAlchemy model for the provider webhook log.
"""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from smsdash.shared.database import Base, JSONType, utcnow


class WebhookLog(Base):
    """Every delivery webhook received, keyed by the provider's event id.

    The unique webhook_event_id is what makes redelivered events no-ops.
    """

    __tablename__ = "webhook_logs"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    webhook_event_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    type: Mapped[int] = mapped_column(Integer, nullable=False)
    type_description: Mapped[str | None] = mapped_column(String(100), nullable=True)
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    payload: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)
    processed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<WebhookLog(event_id={self.webhook_event_id!r}, type={self.type}, processed={self.processed})>"

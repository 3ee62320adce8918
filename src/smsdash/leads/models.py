"""
SQLAlchemy models for leads.
"""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from smsdash.shared.database import Base, JSONType, utcnow
from smsdash.shared.formatting import MAX_PHONE_LENGTH


class LeadStatus(str, Enum):
    """Lead delivery lifecycle."""

    PENDING = "pending"
    # claimed by a dispatch, not yet handed to the provider
    SENDING = "sending"
    SENT = "sent"
    DELIVERED = "delivered"
    FAILED = "failed"
    REPLIED = "replied"


class Lead(Base):
    """One SMS recipient. Leads ingested without a campaign have campaign_id=None."""

    __tablename__ = "leads"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    campaign_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("campaigns.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    fullphone: Mapped[str] = mapped_column(String(MAX_PHONE_LENGTH), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Stored as plain strings so provider-side values never break the column type
    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=LeadStatus.PENDING.value,
        index=True,
    )
    status_code: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status_description: Mapped[str | None] = mapped_column(String(100), nullable=True)
    reference: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    reply: Mapped[str | None] = mapped_column(Text, nullable=True)
    customer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    variables: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    delivered_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    failed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Lead(id={self.id}, phone={self.fullphone}, status={self.status})>"

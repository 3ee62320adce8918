"""
SQLAlchemy models for campaigns.
"""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from smsdash.shared.database import Base, JSONType, utcnow
from smsdash.shared.formatting import calculate_delivery_rate


class Campaign(Base):
    """An SMS blast for one product.

    The counters are denormalised copies of the lead statuses and are
    rewritten by the stats recomputation after every lead mutation.
    """

    __tablename__ = "campaigns"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    product_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("products.id"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    total_leads: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    delivered: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    failed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pending: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # "metadata" is reserved on declarative classes
    extra_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata",
        JSONType,
        nullable=True,
    )

    @property
    def delivery_rate(self) -> int:
        return calculate_delivery_rate(self.delivered, self.total_leads)

    def __repr__(self) -> str:
        return f"<Campaign(id={self.id}, name={self.name!r}, total_leads={self.total_leads})>"

"""
SQLAlchemy models for products and their message templates.
"""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smsdash.shared.database import Base, JSONType, utcnow


class Product(Base):
    """A sellable product; campaigns and templates hang off it."""

    __tablename__ = "products"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    message_templates: Mapped[list["MessageTemplate"]] = relationship(
        "MessageTemplate",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name={self.name!r})>"


class MessageTemplate(Base):
    """SMS body used for every lead of a product's campaigns."""

    __tablename__ = "message_templates"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    product_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    variables: Mapped[list[Any] | None] = mapped_column(JSONType, nullable=True)
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

    product: Mapped[Product] = relationship("Product", back_populates="message_templates")

    def __repr__(self) -> str:
        return f"<MessageTemplate(id={self.id}, product_id={self.product_id})>"

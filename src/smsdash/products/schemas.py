"""
Pydantic schemas for product and message template API.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    """Schema for creating a product."""

    name: str = Field(..., min_length=1, max_length=255, description="Unique product name")


class TemplateSummary(BaseModel):
    """Template fields embedded in product listings."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    message: str
    variables: list[Any] | None = None


class ProductResponse(BaseModel):
    """Schema for product response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    created_at: datetime = Field(..., description="Creation timestamp")
    message_templates: list[TemplateSummary] = Field(default_factory=list)


class ProductEnvelope(BaseModel):
    product: ProductResponse


class ProductListResponse(BaseModel):
    products: list[ProductResponse]


class MessageTemplateUpdate(BaseModel):
    """Schema for creating or replacing a product's message template."""

    message: str = Field(..., min_length=1, description="SMS body with {{variable}} placeholders")
    variables: list[str] | None = Field(
        None,
        description="Placeholder names; extracted from the message when omitted",
    )


class MessageTemplateResponse(BaseModel):
    """Schema for message template response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    product_id: UUID
    message: str
    variables: list[Any] | None = None
    created_at: datetime
    updated_at: datetime


class MessageTemplateEnvelope(BaseModel):
    template: MessageTemplateResponse

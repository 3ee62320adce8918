"""
Pydantic schemas for inbound webhooks.
"""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class IngestionResponse(BaseModel):
    """Response for a lead batch that became a campaign."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    campaign_id: UUID = Field(..., alias="campaignId")
    leads_count: int = Field(..., alias="leadsCount")
    message: str


class IngestedLead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    fullphone: str
    status: str


class LeadsIngestionResponse(BaseModel):
    success: bool = True
    created: int
    failed: int
    leads: list[IngestedLead]


class DizparosWebhookPayload(BaseModel):
    """Delivery event posted by Dizparos."""

    webhook_event_id: str = Field(..., min_length=1)
    type: int = Field(..., description="Dizparos event type code")
    type_description: str
    attempts: int | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class WebhookAck(BaseModel):
    success: bool = True


class DizparosCallbackPayload(BaseModel):
    """Simplified status callback.

    Fields are optional on input so that missing values surface as a 400
    rather than a schema failure.
    """

    dizparos_id: str | None = None
    phone: str | None = None
    status: str | None = None
    error_message: str | None = None


class DizparosCallbackResponse(BaseModel):
    success: bool = True
    lead_id: UUID
    updated: bool
    new_status: str

"""
Pydantic schemas for the lead API.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class LeadResponse(BaseModel):
    """Schema for lead response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    campaign_id: UUID | None = None
    fullphone: str
    message: str
    status: str
    status_code: int | None = None
    status_description: str | None = None
    reference: str | None = None
    reply: str | None = None
    customer_name: str | None = None
    variables: dict[str, Any] | None = None
    delivered_at: datetime | None = None
    failed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class LeadListResponse(BaseModel):
    leads: list[LeadResponse]


class BulkDeleteRequest(BaseModel):
    """Schema for deleting several leads at once."""

    model_config = ConfigDict(populate_by_name=True)

    lead_ids: list[UUID] = Field(..., alias="leadIds", min_length=1)


class BulkDeleteResponse(BaseModel):
    success: bool = True
    deleted: int
    message: str

"""
Pydantic schemas for campaign API.

Request and response bodies keep the camelCase keys the dashboard and the
n8n workflows already send (``campaignName``, ``campaignId``...).
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from smsdash.shared.formatting import MAX_PHONE_LENGTH, normalize_brazilian_phone


class LeadInput(BaseModel):
    """One recipient in a campaign payload.

    Every key besides ``phone`` is kept and made available to the template.
    """

    model_config = ConfigDict(extra="allow")

    phone: str = Field(..., min_length=10, max_length=20, description="Recipient phone number")

    @field_validator("phone")
    @classmethod
    def validate_normalized_length(cls, v: str) -> str:
        """Reject numbers that outgrow the phone column once the country code is added."""
        if len(normalize_brazilian_phone(v)) > MAX_PHONE_LENGTH:
            raise ValueError(f"phone must have at most {MAX_PHONE_LENGTH} digits including the country code")
        return v


class CampaignLeadsPayload(BaseModel):
    """Schema for creating a campaign together with its leads."""

    model_config = ConfigDict(populate_by_name=True)

    campaign_name: str = Field(..., alias="campaignName", min_length=1, max_length=255)
    product_name: str = Field(..., alias="productName", min_length=1, max_length=255)
    leads: list[LeadInput] = Field(..., min_length=1)


class ProductRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class CampaignResponse(BaseModel):
    """Schema for campaign response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Campaign ID")
    product_id: UUID = Field(..., description="Product the campaign promotes")
    name: str = Field(..., description="Campaign name")
    created_at: datetime
    total_leads: int
    delivered: int
    failed: int
    pending: int
    sent: int
    delivery_rate: int = Field(..., description="Delivered leads as a rounded percentage")
    metadata: dict[str, Any] | None = Field(
        None,
        validation_alias=AliasChoices("extra_metadata", "metadata"),
    )


class CampaignDetail(CampaignResponse):
    product: ProductRef | None = None


class CampaignEnvelope(BaseModel):
    campaign: CampaignDetail


class CampaignListResponse(BaseModel):
    campaigns: list[CampaignResponse]


class CampaignCreatedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    campaign_id: UUID = Field(..., alias="campaignId")
    success: bool = True
    message: str


class CampaignSendResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    campaign_id: UUID = Field(..., alias="campaignId")
    pending: int

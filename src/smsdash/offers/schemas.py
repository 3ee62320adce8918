from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class OfferWrite(BaseModel):
    name: str | None = Field(None, max_length=255, description="Offer name")


class OfferResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    created_at: datetime


class OfferEnvelope(BaseModel):
    offer: OfferResponse


class OfferListResponse(BaseModel):
    offers: list[OfferResponse]

"""
Pydantic schemas for the saved template API.

Fields are optional on input so that blank or missing values surface as the
400 ``Missing required field`` error rather than a schema failure.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TemplateWrite(BaseModel):
    """Schema for creating or updating a saved template."""

    name: str | None = Field(None, max_length=255, description="Template name")
    message: str | None = Field(None, description="SMS body")


class TemplateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    message: str
    created_at: datetime
    updated_at: datetime


class TemplateEnvelope(BaseModel):
    template: TemplateResponse


class TemplateListResponse(BaseModel):
    templates: list[TemplateResponse]

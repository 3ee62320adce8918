"""
Response schemas shared across routers.
"""

from pydantic import BaseModel, Field


class DeleteResponse(BaseModel):
    """Generic acknowledgement for delete endpoints."""

    success: bool = True
    message: str


class ErrorDetail(BaseModel):
    """Schema for error detail."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Schema for error response.

    ``error`` carries the bare message for dashboard clients, ``detail`` the
    structured form.
    """

    error: str = Field(..., description="Error message")
    detail: ErrorDetail = Field(..., description="Error details")

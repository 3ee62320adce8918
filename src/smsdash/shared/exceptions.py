"""
Custom exceptions for the application.
"""

from typing import Any
from uuid import UUID


class AppError(Exception):
    """Base exception for application errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(AppError):
    """Requested entity does not exist."""

    status_code = 404

    def __init__(
        self,
        message: str,
        code: str = "NOT_FOUND",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ValidationError(AppError):
    """Validation error."""

    status_code = 400

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ConflictError(AppError):
    """Entity already exists."""

    status_code = 409

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class AuthenticationError(AppError):
    """Caller could not be authenticated."""

    status_code = 401

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


# Entity errors
class ProductNotFoundError(NotFoundError):
    def __init__(self, identifier: str | UUID) -> None:
        super().__init__("Product not found", "PRODUCT_NOT_FOUND", {"product": str(identifier)})


class TemplateNotFoundError(NotFoundError):
    def __init__(self, identifier: str | UUID) -> None:
        super().__init__("Template not found", "TEMPLATE_NOT_FOUND", {"template": str(identifier)})


class OfferNotFoundError(NotFoundError):
    def __init__(self, offer_id: UUID) -> None:
        super().__init__("Offer not found", "OFFER_NOT_FOUND", {"offer_id": str(offer_id)})


class CampaignNotFoundError(NotFoundError):
    """Campaign not found."""

    def __init__(self, campaign_id: UUID) -> None:
        super().__init__(
            "Campaign not found",
            "CAMPAIGN_NOT_FOUND",
            {"campaign_id": str(campaign_id)},
        )
        self.campaign_id = campaign_id


class LeadNotFoundError(NotFoundError):
    def __init__(self, reference: str) -> None:
        super().__init__("Lead not found", "LEAD_NOT_FOUND", {"reference": reference})

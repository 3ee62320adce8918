"""
Product API router.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.campaigns.repository import CampaignRepository
from smsdash.products.repository import ProductRepository
from smsdash.products.schemas import (
    MessageTemplateEnvelope,
    MessageTemplateResponse,
    MessageTemplateUpdate,
    ProductCreate,
    ProductEnvelope,
    ProductListResponse,
    ProductResponse,
)
from smsdash.products.service import ProductService
from smsdash.shared.database import get_db_session
from smsdash.shared.logging import get_logger
from smsdash.shared.schemas import DeleteResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def get_product_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ProductService:
    """Dependency for product service."""
    return ProductService(ProductRepository(session), CampaignRepository(session))


@router.get("", response_model=ProductListResponse)
async def list_products(
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductListResponse:
    """List products, newest first, each with its message template."""
    products = await service.list_products()
    return ProductListResponse(products=[ProductResponse.model_validate(p) for p in products])


@router.post(
    "",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Product already exists"}},
)
async def create_product(
    data: ProductCreate,
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductEnvelope:
    product = await service.create_product(data.name)
    return ProductEnvelope(product=ProductResponse.model_validate(product))


@router.delete(
    "/{product_id}",
    response_model=DeleteResponse,
    responses={404: {"description": "Product not found"}, 409: {"description": "Product in use"}},
)
async def delete_product(
    product_id: UUID,
    service: Annotated[ProductService, Depends(get_product_service)],
) -> DeleteResponse:
    await service.delete_product(product_id)
    return DeleteResponse(message="Product deleted")


@router.get(
    "/{product_id}/template",
    response_model=MessageTemplateEnvelope,
    responses={404: {"description": "Template not found"}},
)
async def get_product_template(
    product_id: UUID,
    service: Annotated[ProductService, Depends(get_product_service)],
) -> MessageTemplateEnvelope:
    template = await service.get_template(product_id)
    return MessageTemplateEnvelope(template=MessageTemplateResponse.model_validate(template))


@router.put(
    "/{product_id}/template",
    response_model=MessageTemplateEnvelope,
    responses={
        200: {"description": "Template updated"},
        201: {"description": "Template created"},
        404: {"description": "Product not found"},
    },
)
async def save_product_template(
    product_id: UUID,
    data: MessageTemplateUpdate,
    response: Response,
    service: Annotated[ProductService, Depends(get_product_service)],
) -> MessageTemplateEnvelope:
    """Create or replace the product's SMS template.

    When ``variables`` is omitted the placeholder names are extracted from
    the message body.
    """
    template, created = await service.save_template(product_id, data)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return MessageTemplateEnvelope(template=MessageTemplateResponse.model_validate(template))

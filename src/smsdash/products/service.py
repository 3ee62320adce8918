"""
Product service for business logic.
"""

from uuid import UUID

from smsdash.campaigns.repository import CampaignRepository
from smsdash.products.models import MessageTemplate, Product
from smsdash.products.repository import ProductRepository
from smsdash.products.schemas import MessageTemplateUpdate
from smsdash.shared.exceptions import (
    ConflictError,
    ProductNotFoundError,
    TemplateNotFoundError,
)
from smsdash.shared.interpolation import extract_variables
from smsdash.shared.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    """Service for product and product template business logic."""

    def __init__(
        self,
        repository: ProductRepository,
        campaign_repository: CampaignRepository,
    ) -> None:
        self._repository = repository
        self._campaign_repository = campaign_repository

    async def list_products(self) -> list[Product]:
        return await self._repository.list_products()

    async def get_product(self, product_id: UUID) -> Product:
        product = await self._repository.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def create_product(self, name: str) -> Product:
        """Create a product; names are unique."""
        if await self._repository.get_by_name(name) is not None:
            raise ConflictError(
                "Product already exists",
                "PRODUCT_EXISTS",
                {"name": name},
            )

        product = await self._repository.create(Product(name=name))
        logger.info("Product created", extra={"product_id": str(product.id), "product_name": name})
        return product

    async def delete_product(self, product_id: UUID) -> None:
        """Delete a product and its template. Products with campaigns are kept."""
        product = await self.get_product(product_id)

        campaign_count = await self._campaign_repository.count_by_product(product_id)
        if campaign_count:
            raise ConflictError(
                "Product has campaigns and cannot be deleted",
                "PRODUCT_IN_USE",
                {"product_id": str(product_id), "campaigns": campaign_count},
            )

        await self._repository.delete(product)
        logger.info("Product deleted", extra={"product_id": str(product_id)})

    async def get_template(self, product_id: UUID) -> MessageTemplate:
        template = await self._repository.get_template(product_id)
        if template is None:
            raise TemplateNotFoundError(product_id)
        return template

    async def save_template(
        self,
        product_id: UUID,
        data: MessageTemplateUpdate,
    ) -> tuple[MessageTemplate, bool]:
        """Create or replace the product's template.

        Returns:
            Tuple of (template, created) where created is False on update.
        """
        await self.get_product(product_id)

        variables = data.variables if data.variables is not None else extract_variables(data.message)

        existing = await self._repository.get_template(product_id)
        if existing is None:
            template = await self._repository.create_template(product_id, data.message, variables)
            if template is None:
                existing = await self._repository.get_template(product_id)

        if existing is not None:
            template = await self._repository.update_template(existing, data.message, variables)
            logger.info("Template updated", extra={"product_id": str(product_id)})
            return template, False

        logger.info(
            "Template created",
            extra={"product_id": str(product_id), "variables": variables},
        )
        return template, True

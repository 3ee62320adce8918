"""
Product repository for database operations.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.products.models import MessageTemplate, Product
from smsdash.shared.logging import get_logger

logger = get_logger(__name__)


class ProductRepository:
    """Repository for product and message template database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session.
        """
        self._session = session

    async def list_products(self) -> list[Product]:
        """List products newest first, templates eagerly loaded."""
        stmt = (
            select(Product)
            .order_by(Product.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, product_id: UUID) -> Product | None:
        """Get a product by ID.

        Args:
            product_id: Product UUID.

        Returns:
            Product if found, None otherwise.
        """
        result = await self._session.execute(select(Product).where(Product.id == product_id))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Product | None:
        """Get a product by its unique name."""
        result = await self._session.execute(select(Product).where(Product.name == name))
        return result.scalar_one_or_none()

    async def create(self, product: Product) -> Product:
        """Create a new product."""
        self._session.add(product)
        await self._session.flush()
        await self._session.refresh(product)
        logger.info("Created product", extra={"product_id": str(product.id)})
        return product

    async def delete(self, product: Product) -> None:
        """Delete a product together with its message templates."""
        await self._session.execute(
            delete(MessageTemplate).where(MessageTemplate.product_id == product.id)
        )
        await self._session.execute(delete(Product).where(Product.id == product.id))
        self._session.expunge(product)
        logger.info("Deleted product", extra={"product_id": str(product.id)})

    async def get_template(self, product_id: UUID) -> MessageTemplate | None:
        """Get the message template configured for a product."""
        stmt = (
            select(MessageTemplate)
            .where(MessageTemplate.product_id == product_id)
            .order_by(MessageTemplate.created_at)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_template(
        self,
        product_id: UUID,
        message: str,
        variables: list[Any] | None,
    ) -> MessageTemplate | None:
        """Create the message template of a product.

        Returns:
            The new template, or None when another request created one first.
        """
        template = MessageTemplate(product_id=product_id, message=message, variables=variables)
        self._session.add(template)
        try:
            await self._session.flush()
        except IntegrityError:
            # one template per product
            await self._session.rollback()
            logger.info("Template created concurrently", extra={"product_id": str(product_id)})
            return None
        await self._session.refresh(template)
        return template

    async def update_template(
        self,
        template: MessageTemplate,
        message: str,
        variables: list[Any] | None,
    ) -> MessageTemplate:
        """Replace message and variables of an existing template."""
        template.message = message
        template.variables = variables
        await self._session.flush()
        await self._session.refresh(template)
        return template

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.templates.models import Template


class TemplateRepository:
    """Repository for saved template database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_templates(self) -> list[Template]:
        result = await self._session.execute(select(Template).order_by(Template.created_at.desc()))
        return list(result.scalars().all())

    async def get_by_id(self, template_id: UUID) -> Template | None:
        result = await self._session.execute(select(Template).where(Template.id == template_id))
        return result.scalar_one_or_none()

    async def create(self, template: Template) -> Template:
        self._session.add(template)
        await self._session.flush()
        await self._session.refresh(template)
        return template

    async def update(self, template: Template) -> Template:
        await self._session.flush()
        await self._session.refresh(template)
        return template

    async def delete(self, template_id: UUID) -> int:
        """Delete by ID and return the number of rows removed."""
        result = await self._session.execute(delete(Template).where(Template.id == template_id))
        return result.rowcount or 0

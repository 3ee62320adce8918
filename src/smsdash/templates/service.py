from uuid import UUID

from smsdash.shared.exceptions import TemplateNotFoundError
from smsdash.shared.logging import get_logger
from smsdash.shared.validation import required_text
from smsdash.templates.models import Template
from smsdash.templates.repository import TemplateRepository
from smsdash.templates.schemas import TemplateWrite

logger = get_logger(__name__)


class TemplateService:
    """Service for the saved template library."""

    def __init__(self, repository: TemplateRepository) -> None:
        self._repository = repository

    async def list_templates(self) -> list[Template]:
        return await self._repository.list_templates()

    async def create_template(self, data: TemplateWrite) -> Template:
        name = required_text(data.name, "name")
        message = required_text(data.message, "message")
        template = await self._repository.create(Template(name=name, message=message))
        logger.info("Saved template created", extra={"template_id": str(template.id)})
        return template

    async def update_template(self, template_id: UUID, data: TemplateWrite) -> Template:
        name = required_text(data.name, "name")
        message = required_text(data.message, "message")

        template = await self._repository.get_by_id(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)

        template.name = name
        template.message = message
        return await self._repository.update(template)

    async def delete_template(self, template_id: UUID) -> None:
        if not await self._repository.delete(template_id):
            raise TemplateNotFoundError(template_id)
        logger.info("Saved template deleted", extra={"template_id": str(template_id)})

"""
API integration tests for product endpoints.
"""

from uuid import UUID, uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.campaigns.models import Campaign
from smsdash.campaigns.repository import CampaignRepository
from smsdash.products.models import MessageTemplate, Product
from smsdash.products.repository import ProductRepository
from smsdash.products.schemas import MessageTemplateUpdate
from smsdash.products.service import ProductService


class TestProductCrud:
    @pytest.mark.asyncio
    async def test_create_and_list(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/api/products", json={"name": "Curso de Python"})

        assert response.status_code == 201
        product = response.json()["product"]
        assert product["name"] == "Curso de Python"
        assert product["message_templates"] == []

        listing = await async_client.get("/api/products")
        assert listing.status_code == 200
        assert [p["name"] for p in listing.json()["products"]] == ["Curso de Python"]

    @pytest.mark.asyncio
    async def test_duplicate_name_conflict(self, async_client: AsyncClient) -> None:
        await async_client.post("/api/products", json={"name": "Dup"})
        response = await async_client.post("/api/products", json={"name": "Dup"})

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "Product already exists"
        assert body["detail"]["code"] == "PRODUCT_EXISTS"

    @pytest.mark.asyncio
    async def test_invalid_payload(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/api/products", json={"name": ""})

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_list_includes_template(self, async_client: AsyncClient, product: Product) -> None:
        response = await async_client.get("/api/products")

        templates = response.json()["products"][0]["message_templates"]
        assert len(templates) == 1
        assert templates[0]["variables"] == ["name", "code"]

    @pytest.mark.asyncio
    async def test_delete_product(self, async_client: AsyncClient, product: Product) -> None:
        response = await async_client.delete(f"/api/products/{product.id}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Product deleted"}
        assert (await async_client.get(f"/api/products/{product.id}/template")).status_code == 404
        assert (await async_client.get("/api/products")).json()["products"] == []

    @pytest.mark.asyncio
    async def test_delete_missing_product(self, async_client: AsyncClient) -> None:
        response = await async_client.delete(f"/api/products/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "Product not found"

    @pytest.mark.asyncio
    async def test_delete_product_with_campaigns(
        self,
        async_client: AsyncClient,
        campaign: Campaign,
    ) -> None:
        response = await async_client.delete(f"/api/products/{campaign.product_id}")

        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "PRODUCT_IN_USE"


class TestProductTemplate:
    @pytest.mark.asyncio
    async def test_get_template(self, async_client: AsyncClient, product: Product) -> None:
        response = await async_client.get(f"/api/products/{product.id}/template")

        assert response.status_code == 200
        template = response.json()["template"]
        assert template["message"] == "Olá {{name}}, use o cupom {{ code }}"
        assert template["product_id"] == str(product.id)

    @pytest.mark.asyncio
    async def test_template_not_found(self, async_client: AsyncClient) -> None:
        created = await async_client.post("/api/products", json={"name": "Sem template"})
        product_id = created.json()["product"]["id"]

        response = await async_client.get(f"/api/products/{product_id}/template")

        assert response.status_code == 404
        assert response.json()["error"] == "Template not found"

    @pytest.mark.asyncio
    async def test_put_creates_then_updates(self, async_client: AsyncClient) -> None:
        created = await async_client.post("/api/products", json={"name": "Novo"})
        product_id = created.json()["product"]["id"]

        first = await async_client.put(
            f"/api/products/{product_id}/template",
            json={"message": "Oi {{ first_name }}, veja {{offer}} {{first_name}}"},
        )
        assert first.status_code == 201
        assert first.json()["template"]["variables"] == ["first_name", "offer"]

        second = await async_client.put(
            f"/api/products/{product_id}/template",
            json={"message": "Oi {{name}}", "variables": ["name", "extra"]},
        )
        assert second.status_code == 200
        assert second.json()["template"]["id"] == first.json()["template"]["id"]
        assert second.json()["template"]["variables"] == ["name", "extra"]

    @pytest.mark.asyncio
    async def test_put_for_missing_product(self, async_client: AsyncClient) -> None:
        response = await async_client.put(f"/api/products/{uuid4()}/template", json={"message": "x"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_put_requires_message(self, async_client: AsyncClient, product: Product) -> None:
        response = await async_client.put(f"/api/products/{product.id}/template", json={"message": ""})

        assert response.status_code == 422


class _StaleTemplateLookup(ProductRepository):
    """Misses the template on the first lookup, as a request racing another PUT would."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self._lookups = 0

    async def get_template(self, product_id: UUID) -> MessageTemplate | None:
        self._lookups += 1
        if self._lookups == 1:
            return None
        return await super().get_template(product_id)


class TestTemplateUniqueness:
    @pytest.mark.asyncio
    async def test_lost_insert_race_updates_existing_template(
        self,
        db_session: AsyncSession,
        product: Product,
    ) -> None:
        product_id = product.id
        service = ProductService(_StaleTemplateLookup(db_session), CampaignRepository(db_session))

        template, created = await service.save_template(
            product_id,
            MessageTemplateUpdate(message="Oi {{name}}"),
        )

        assert created is False
        assert template.message == "Oi {{name}}"
        rows = (
            await db_session.execute(
                select(MessageTemplate).where(MessageTemplate.product_id == product_id)
            )
        ).scalars().all()
        assert len(rows) == 1
        assert rows[0].variables == ["name"]

"""
Read-only HTML dashboard.
"""

from html import escape
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from smsdash.campaigns.models import Campaign
from smsdash.campaigns.repository import CampaignRepository
from smsdash.leads.models import Lead
from smsdash.leads.repository import LeadRepository
from smsdash.products.repository import ProductRepository
from smsdash.shared.database import get_db_session
from smsdash.shared.exceptions import CampaignNotFoundError
from smsdash.shared.formatting import format_phone_number, lead_status_label

router = APIRouter(tags=["dashboard"], include_in_schema=False)

_PAGE = """<!DOCTYPE html>
<html lang="pt-BR">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: sans-serif; margin: 2rem; color: #222; }}
table {{ border-collapse: collapse; width: 100%; margin-bottom: 2rem; }}
th, td {{ border-bottom: 1px solid #ddd; padding: .4rem .6rem; text-align: left; }}
.status-delivered {{ color: #15803d; }}
.status-failed {{ color: #b91c1c; }}
.status-replied {{ color: #1d4ed8; }}
</style>
</head>
<body>
{body}
</body>
</html>
"""


def _page(title: str, body: str) -> HTMLResponse:
    return HTMLResponse(_PAGE.format(title=escape(title), body=body))


def _campaign_row(campaign: Campaign, product_names: dict[UUID, str]) -> str:
    return (
        "<tr>"
        f'<td><a href="/campaigns/{campaign.id}">{escape(campaign.name)}</a></td>'
        f"<td>{escape(product_names.get(campaign.product_id, '-'))}</td>"
        f"<td>{campaign.total_leads}</td>"
        f"<td>{campaign.sent}</td>"
        f"<td>{campaign.delivered}</td>"
        f"<td>{campaign.failed}</td>"
        f"<td>{campaign.pending}</td>"
        f"<td>{campaign.delivery_rate}%</td>"
        f"<td>{campaign.created_at:%d/%m/%Y %H:%M}</td>"
        "</tr>"
    )


def _lead_row(lead: Lead) -> str:
    return (
        "<tr>"
        f"<td>{escape(lead.customer_name or '-')}</td>"
        f"<td>{escape(format_phone_number(lead.fullphone))}</td>"
        f'<td class="status-{escape(lead.status)}">{escape(lead_status_label(lead.status))}</td>'
        f"<td>{escape(lead.status_description or '')}</td>"
        f"<td>{escape(lead.reply or '')}</td>"
        f"<td>{escape(lead.message)}</td>"
        "</tr>"
    )


@router.get("/", response_class=HTMLResponse)
async def overview(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> HTMLResponse:
    campaigns = await CampaignRepository(session).list_campaigns()
    products = await ProductRepository(session).list_products()
    product_names = {p.id: p.name for p in products}

    campaign_rows = "".join(_campaign_row(c, product_names) for c in campaigns)
    product_rows = "".join(
        f"<tr><td>{escape(p.name)}</td>"
        f"<td>{'Sim' if p.message_templates else 'Não'}</td></tr>"
        for p in products
    )
    body = (
        "<h1>Campanhas</h1>"
        "<table><thead><tr><th>Nome</th><th>Produto</th><th>Leads</th><th>Enviados</th>"
        "<th>Entregues</th><th>Falhas</th><th>Pendentes</th><th>Taxa de entrega</th>"
        f"<th>Criada em</th></tr></thead><tbody>{campaign_rows}</tbody></table>"
        "<h2>Produtos</h2>"
        "<table><thead><tr><th>Nome</th><th>Template</th></tr></thead>"
        f"<tbody>{product_rows}</tbody></table>"
    )
    return _page("Campanhas", body)


@router.get("/campaigns/{campaign_id}", response_class=HTMLResponse)
async def campaign_page(
    campaign_id: UUID,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> HTMLResponse:
    campaign = await CampaignRepository(session).get_by_id(campaign_id)
    if campaign is None:
        raise CampaignNotFoundError(campaign_id)
    leads = await LeadRepository(session).list_by_campaign(campaign_id)

    lead_rows = "".join(_lead_row(lead) for lead in leads)
    body = (
        '<p><a href="/">&larr; Campanhas</a></p>'
        f"<h1>{escape(campaign.name)}</h1>"
        f"<p>{campaign.total_leads} leads &middot; {campaign.sent} enviados &middot; "
        f"{campaign.delivered} entregues &middot; {campaign.failed} falhas &middot; "
        f"{campaign.pending} pendentes &middot; taxa de entrega {campaign.delivery_rate}%</p>"
        "<table><thead><tr><th>Cliente</th><th>Telefone</th><th>Status</th>"
        "<th>Descrição</th><th>Resposta</th><th>Mensagem</th></tr></thead>"
        f"<tbody>{lead_rows}</tbody></table>"
    )
    return _page(campaign.name, body)

"""Email Campaigns — drafts, segment preview, and the one-time send through Outlook.

Invariants:
    - segmentCriteria stored as camelCase JSON (see schemas/campaign.py)
    - Send: 409 when already sent, 400 when the segment matches nobody,
      503 when Outlook is not connected
"""

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.infrastructure.database import get_db
from artist_crm.infrastructure.outlook_client import (
    ResilientOutlookClient, get_outlook_client,
)
from artist_crm.models.email_campaign import EmailCampaign
from artist_crm.schemas.campaign import (
    CampaignCreate, CampaignRecipient, CampaignRecipients, CampaignResponse,
    CampaignUpdate,
)
from artist_crm.services.campaign_delivery import resolve_recipients, send_campaign
from artist_crm.services.records import apply_changes, delete_record, get_or_404, save

router = APIRouter(prefix="/api/campaigns", tags=["campaigns"])


@router.get("", response_model=list[CampaignResponse])
async def list_campaigns(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(EmailCampaign).order_by(EmailCampaign.created_at.desc()))
    return result.scalars().all()


@router.get("/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(campaign_id: UUID, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, EmailCampaign, campaign_id, "EmailCampaign")


@router.post("", response_model=CampaignResponse, status_code=status.HTTP_201_CREATED)
async def create_campaign(body: CampaignCreate, db: AsyncSession = Depends(get_db)):
    campaign = EmailCampaign(
        name=body.name,
        subject=body.subject,
        body=body.body,
        segment_criteria=body.segment_criteria.to_json() if body.segment_criteria else None,
    )
    return await save(db, campaign)


@router.patch("/{campaign_id}", response_model=CampaignResponse)
async def update_campaign(
    campaign_id: UUID, body: CampaignUpdate, db: AsyncSession = Depends(get_db),
):
    campaign = await get_or_404(db, EmailCampaign, campaign_id, "EmailCampaign")
    return await save(db, apply_changes(campaign, body.changes()))


@router.delete("/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_campaign(campaign_id: UUID, db: AsyncSession = Depends(get_db)):
    campaign = await get_or_404(db, EmailCampaign, campaign_id, "EmailCampaign")
    await delete_record(db, campaign, "EmailCampaign")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{campaign_id}/recipients", response_model=CampaignRecipients)
async def campaign_recipients(campaign_id: UUID, db: AsyncSession = Depends(get_db)):
    campaign = await get_or_404(db, EmailCampaign, campaign_id, "EmailCampaign")
    artists = await resolve_recipients(db, campaign)
    return CampaignRecipients(
        campaign_id=campaign.id,
        count=len(artists),
        recipients=[CampaignRecipient.model_validate(a) for a in artists],
    )


@router.post("/{campaign_id}/send", response_model=CampaignResponse)
async def send(
    campaign_id: UUID,
    db: AsyncSession = Depends(get_db),
    outlook: ResilientOutlookClient = Depends(get_outlook_client),
):
    campaign = await get_or_404(db, EmailCampaign, campaign_id, "EmailCampaign")
    return await send_campaign(db, campaign, outlook, datetime.now(timezone.utc))

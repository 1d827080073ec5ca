"""Campaign Delivery — recipient resolution and the single BCC send via Outlook.

Invariants:
    - Recipients are artists matching the campaign's segment criteria
    - A campaign is sent at most once (sent_at set → ConflictError)
    - No matching address → BusinessRuleError, nothing sent
    - sent_at and recipient_count stamped only after Graph accepted the mail
"""

import logging
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.core.campaign_segments import (
    ArtistEngagement, select_recipients, unique_addresses,
)
from artist_crm.core.errors import BusinessRuleError, ConflictError, ErrorContext
from artist_crm.infrastructure.outlook_client import ResilientOutlookClient
from artist_crm.models.accompaniment_plan import AccompanimentPlan
from artist_crm.models.artist import Artist
from artist_crm.models.email_campaign import EmailCampaign
from artist_crm.models.interaction import Interaction

logger = logging.getLogger(__name__)


async def load_engagement(db: AsyncSession) -> dict:
    """Plan and interaction counts per artist id."""
    plan_counts = dict((await db.execute(
        select(AccompanimentPlan.artist_id, func.count(AccompanimentPlan.id))
        .group_by(AccompanimentPlan.artist_id)
    )).all())
    interaction_counts = dict((await db.execute(
        select(Interaction.artist_id, func.count(Interaction.id))
        .group_by(Interaction.artist_id)
    )).all())
    return {
        artist_id: ArtistEngagement(
            plan_count=plan_counts.get(artist_id, 0),
            interaction_count=interaction_counts.get(artist_id, 0),
        )
        for artist_id in set(plan_counts) | set(interaction_counts)
    }


async def resolve_recipients(db: AsyncSession, campaign: EmailCampaign) -> list[Artist]:
    artists = (await db.execute(
        select(Artist).order_by(Artist.last_name, Artist.first_name)
    )).scalars().all()
    engagement = await load_engagement(db)
    return select_recipients(list(artists), engagement, campaign.segment_criteria)


async def send_campaign(
    db: AsyncSession,
    campaign: EmailCampaign,
    outlook: ResilientOutlookClient,
    now: datetime,
) -> EmailCampaign:
    context = ErrorContext(entity="EmailCampaign", entity_id=str(campaign.id))
    if campaign.sent_at is not None:
        raise ConflictError("Campaign already sent", context)

    addresses = unique_addresses(await resolve_recipients(db, campaign))
    if not addresses:
        raise BusinessRuleError("Campaign has no recipients", context)

    await outlook.send_mail(campaign.subject, campaign.body, addresses)

    campaign.sent_at = now
    campaign.recipient_count = len(addresses)
    await db.commit()
    await db.refresh(campaign)
    logger.info(
        f"Campaign sent to {len(addresses)} recipients",
        extra={"entity": "EmailCampaign", "entity_id": str(campaign.id)},
    )
    return campaign

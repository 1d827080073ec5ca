"""Outlook Archive — store Graph mail and events as artist interactions, once.

Invariants:
    - Artist must exist before any Graph call is made
    - (artist_id, external_id) identifies an archived item: a second archive/sync
      returns the stored interaction with created=False
    - Concurrent archives of one item race on the unique constraint; the loser
      rolls back and returns the winner's row with created=False
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.core.domain_types import ArtistId
from artist_crm.core.outlook_records import (
    interaction_from_event, interaction_from_message,
)
from artist_crm.infrastructure.outlook_client import ResilientOutlookClient
from artist_crm.models.artist import Artist
from artist_crm.models.interaction import Interaction
from artist_crm.services.records import get_or_404

logger = logging.getLogger(__name__)


async def _existing(db: AsyncSession, artist_id: ArtistId, external_id: str) -> Interaction | None:
    result = await db.execute(
        select(Interaction)
        .where(Interaction.artist_id == artist_id)
        .where(Interaction.external_id == external_id)
    )
    return result.scalars().first()


async def _store(
    db: AsyncSession, artist_id: ArtistId, fields: dict,
) -> tuple[Interaction, bool]:
    interaction = Interaction(artist_id=artist_id, **fields)
    db.add(interaction)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        stored = await _existing(db, artist_id, fields["external_id"])
        if stored is None:
            raise
        logger.info(
            "Outlook item archived concurrently, returning stored interaction",
            extra={"entity": "Interaction", "entity_id": str(stored.id)},
        )
        return stored, False
    await db.refresh(interaction)
    logger.info(
        f"Archived Outlook item as {fields['type']} interaction",
        extra={"entity": "Interaction", "entity_id": str(interaction.id)},
    )
    return interaction, True


async def archive_email(
    db: AsyncSession,
    outlook: ResilientOutlookClient,
    message_id: str,
    artist_id: ArtistId,
) -> tuple[Interaction, bool]:
    await get_or_404(db, Artist, artist_id, "Artist")
    existing = await _existing(db, artist_id, message_id)
    if existing:
        return existing, False
    message = await outlook.get_email(message_id)
    message.setdefault("id", message_id)
    return await _store(db, artist_id, interaction_from_message(message))


async def sync_event(
    db: AsyncSession,
    outlook: ResilientOutlookClient,
    event_id: str,
    artist_id: ArtistId,
) -> tuple[Interaction, bool]:
    await get_or_404(db, Artist, artist_id, "Artist")
    existing = await _existing(db, artist_id, event_id)
    if existing:
        return existing, False
    event = await outlook.get_event(event_id)
    event.setdefault("id", event_id)
    return await _store(db, artist_id, interaction_from_event(event))

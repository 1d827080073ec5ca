"""Outlook — mail and calendar passthrough, plus archive/sync into the artist history.

Invariants:
    - /search routes declared before /{id} routes
    - archive/sync answer 201 when an interaction is created, 200 when the item
      was already stored for that artist
    - Missing Outlook credentials surface as 503 (OutlookNotConnectedError)
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.core.domain_types import ArtistId
from artist_crm.infrastructure.database import get_db
from artist_crm.infrastructure.outlook_client import (
    ResilientOutlookClient, get_outlook_client,
)
from artist_crm.schemas.artist import InteractionResponse
from artist_crm.schemas.outlook import ArtistLink, CalendarEventCreate
from artist_crm.services.outlook_archive import archive_email, sync_event

router = APIRouter(prefix="/api/outlook", tags=["outlook"])


# ─── Mail ───────────────────────────────────────────────────────

@router.get("/emails")
async def recent_emails(
    top: int = Query(50, ge=1, le=500),
    outlook: ResilientOutlookClient = Depends(get_outlook_client),
):
    return await outlook.get_recent_emails(top=top)


@router.get("/emails/search")
async def search_emails(
    email: str = Query(..., min_length=3),
    top: int = Query(20, ge=1, le=500),
    outlook: ResilientOutlookClient = Depends(get_outlook_client),
):
    return await outlook.search_emails_by_address(email.strip(), top=top)


@router.get("/emails/{message_id}")
async def get_email(
    message_id: str,
    outlook: ResilientOutlookClient = Depends(get_outlook_client),
):
    return await outlook.get_email(message_id)


@router.post("/emails/{message_id}/archive", response_model=InteractionResponse)
async def archive(
    message_id: str,
    body: ArtistLink,
    response: Response,
    db: AsyncSession = Depends(get_db),
    outlook: ResilientOutlookClient = Depends(get_outlook_client),
):
    interaction, created = await archive_email(db, outlook, message_id, ArtistId(body.artist_id))
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return interaction


# ─── Calendar ───────────────────────────────────────────────────

@router.get("/calendar/events")
async def calendar_events(
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
    top: int = Query(50, ge=1, le=500),
    outlook: ResilientOutlookClient = Depends(get_outlook_client),
):
    return await outlook.get_calendar_events(start=start, end=end, top=top)


@router.get("/calendar/events/search")
async def search_events(
    email: str = Query(..., min_length=3),
    top: int = Query(20, ge=1, le=500),
    outlook: ResilientOutlookClient = Depends(get_outlook_client),
):
    return await outlook.search_events_by_attendee(email.strip(), top=top)


@router.get("/calendar/events/{event_id}")
async def get_event(
    event_id: str,
    outlook: ResilientOutlookClient = Depends(get_outlook_client),
):
    return await outlook.get_event(event_id)


@router.post("/calendar/events", status_code=status.HTTP_201_CREATED)
async def create_event(
    body: CalendarEventCreate,
    outlook: ResilientOutlookClient = Depends(get_outlook_client),
):
    return await outlook.create_calendar_event(body.to_graph())


@router.post("/calendar/events/{event_id}/sync", response_model=InteractionResponse)
async def sync(
    event_id: str,
    body: ArtistLink,
    response: Response,
    db: AsyncSession = Depends(get_db),
    outlook: ResilientOutlookClient = Depends(get_outlook_client),
):
    interaction, created = await sync_event(db, outlook, event_id, ArtistId(body.artist_id))
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return interaction

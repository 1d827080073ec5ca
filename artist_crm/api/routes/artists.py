"""Artists — CRUD plus the per-artist lists shown on the profile page.

Invariants:
    - Nested lists 404 when the artist does not exist (never an empty list)
    - Deleting an artist removes everything scoped to it (ORM cascade)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.infrastructure.database import get_db
from artist_crm.models.accompaniment_plan import AccompanimentPlan
from artist_crm.models.application import Application
from artist_crm.models.artist import Artist
from artist_crm.models.artist_note import ArtistNote
from artist_crm.models.document import Document
from artist_crm.models.interaction import Interaction
from artist_crm.schemas.artist import (
    ArtistCreate, ArtistNoteResponse, ArtistResponse, ArtistUpdate,
    InteractionResponse,
)
from artist_crm.schemas.document import DocumentResponse
from artist_crm.schemas.opportunity import ApplicationResponse
from artist_crm.schemas.plan import PlanResponse
from artist_crm.services.records import apply_changes, delete_record, get_or_404, save

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/artists", tags=["artists"])


@router.get("", response_model=list[ArtistResponse])
async def list_artists(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Artist).order_by(Artist.created_at.desc()))
    return result.scalars().all()


@router.get("/{artist_id}", response_model=ArtistResponse)
async def get_artist(artist_id: UUID, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Artist, artist_id, "Artist")


@router.post("", response_model=ArtistResponse, status_code=status.HTTP_201_CREATED)
async def create_artist(body: ArtistCreate, db: AsyncSession = Depends(get_db)):
    artist = await save(db, Artist(**body.model_dump()))
    logger.info("Artist created", extra={"entity": "Artist", "entity_id": str(artist.id)})
    return artist


@router.patch("/{artist_id}", response_model=ArtistResponse)
async def update_artist(
    artist_id: UUID, body: ArtistUpdate, db: AsyncSession = Depends(get_db),
):
    artist = await get_or_404(db, Artist, artist_id, "Artist")
    return await save(db, apply_changes(artist, body.changes()))


@router.delete("/{artist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_artist(artist_id: UUID, db: AsyncSession = Depends(get_db)):
    artist = await get_or_404(db, Artist, artist_id, "Artist")
    await delete_record(db, artist, "Artist")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── Profile lists ──────────────────────────────────────────────

@router.get("/{artist_id}/interactions", response_model=list[InteractionResponse])
async def list_artist_interactions(artist_id: UUID, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Artist, artist_id, "Artist")
    result = await db.execute(
        select(Interaction)
        .where(Interaction.artist_id == artist_id)
        .order_by(Interaction.date.desc())
    )
    return result.scalars().all()


@router.get("/{artist_id}/plans", response_model=list[PlanResponse])
async def list_artist_plans(artist_id: UUID, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Artist, artist_id, "Artist")
    result = await db.execute(
        select(AccompanimentPlan)
        .where(AccompanimentPlan.artist_id == artist_id)
        .order_by(AccompanimentPlan.created_at.desc())
    )
    return result.scalars().all()


@router.get("/{artist_id}/applications", response_model=list[ApplicationResponse])
async def list_artist_applications(artist_id: UUID, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Artist, artist_id, "Artist")
    result = await db.execute(
        select(Application)
        .where(Application.artist_id == artist_id)
        .order_by(Application.created_at.desc())
    )
    return result.scalars().all()


@router.get("/{artist_id}/documents", response_model=list[DocumentResponse])
async def list_artist_documents(artist_id: UUID, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Artist, artist_id, "Artist")
    result = await db.execute(
        select(Document)
        .where(Document.artist_id == artist_id)
        .order_by(Document.uploaded_at.desc())
    )
    return result.scalars().all()


@router.get("/{artist_id}/notes", response_model=list[ArtistNoteResponse])
async def list_artist_notes(artist_id: UUID, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Artist, artist_id, "Artist")
    result = await db.execute(
        select(ArtistNote)
        .where(ArtistNote.artist_id == artist_id)
        .order_by(ArtistNote.session_date.desc())
    )
    return result.scalars().all()

"""Artist Notes — dated notes taken during accompaniment sessions."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.infrastructure.database import get_db
from artist_crm.models.artist import Artist
from artist_crm.models.artist_note import ArtistNote
from artist_crm.schemas.artist import ArtistNoteCreate, ArtistNoteResponse
from artist_crm.services.records import delete_record, get_or_404, save

router = APIRouter(prefix="/api/notes", tags=["notes"])


@router.post("", response_model=ArtistNoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(body: ArtistNoteCreate, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Artist, body.artist_id, "Artist")
    return await save(db, ArtistNote(**body.model_dump()))


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: UUID, db: AsyncSession = Depends(get_db)):
    note = await get_or_404(db, ArtistNote, note_id, "ArtistNote")
    await delete_record(db, note, "ArtistNote")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Interactions — contact history entries (meetings, calls, emails...)."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.infrastructure.database import get_db
from artist_crm.models.artist import Artist
from artist_crm.models.interaction import Interaction
from artist_crm.schemas.artist import InteractionCreate, InteractionResponse
from artist_crm.services.records import delete_record, get_or_404, save

router = APIRouter(prefix="/api/interactions", tags=["interactions"])


@router.post("", response_model=InteractionResponse, status_code=status.HTTP_201_CREATED)
async def create_interaction(body: InteractionCreate, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Artist, body.artist_id, "Artist")
    return await save(db, Interaction(**body.model_dump()))


@router.get("/{interaction_id}", response_model=InteractionResponse)
async def get_interaction(interaction_id: UUID, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Interaction, interaction_id, "Interaction")


@router.delete("/{interaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_interaction(interaction_id: UUID, db: AsyncSession = Depends(get_db)):
    interaction = await get_or_404(db, Interaction, interaction_id, "Interaction")
    await delete_record(db, interaction, "Interaction")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

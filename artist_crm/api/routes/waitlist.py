"""Waitlist — queue of people waiting for accompaniment.

Invariants:
    - Listing is ordered by position ascending
    - Omitted position appends to the end of the queue
    - First move to "contacted" stamps contactedAt
"""

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.core.waitlist_queue import contacted_at_for, next_position
from artist_crm.infrastructure.database import get_db
from artist_crm.models.waitlist_entry import WaitlistEntry
from artist_crm.schemas.waitlist import WaitlistCreate, WaitlistResponse, WaitlistUpdate
from artist_crm.services.records import apply_changes, delete_record, get_or_404, save

router = APIRouter(prefix="/api/waitlist", tags=["waitlist"])


@router.get("", response_model=list[WaitlistResponse])
async def list_waitlist(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(WaitlistEntry).order_by(WaitlistEntry.position, WaitlistEntry.created_at)
    )
    return result.scalars().all()


@router.post("", response_model=WaitlistResponse, status_code=status.HTTP_201_CREATED)
async def create_waitlist_entry(body: WaitlistCreate, db: AsyncSession = Depends(get_db)):
    data = body.model_dump()
    if data["position"] is None:
        current_max = await db.scalar(select(func.max(WaitlistEntry.position)))
        data["position"] = next_position(current_max)
    data["contacted_at"] = contacted_at_for(
        data["status"], None, datetime.now(timezone.utc),
    )
    return await save(db, WaitlistEntry(**data))


@router.patch("/{entry_id}", response_model=WaitlistResponse)
async def update_waitlist_entry(
    entry_id: UUID, body: WaitlistUpdate, db: AsyncSession = Depends(get_db),
):
    entry = await get_or_404(db, WaitlistEntry, entry_id, "WaitlistEntry")
    changes = body.changes()
    if "status" in changes and "contacted_at" not in changes:
        changes["contacted_at"] = contacted_at_for(
            changes["status"], entry.contacted_at, datetime.now(timezone.utc),
        )
    return await save(db, apply_changes(entry, changes))


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_waitlist_entry(entry_id: UUID, db: AsyncSession = Depends(get_db)):
    entry = await get_or_404(db, WaitlistEntry, entry_id, "WaitlistEntry")
    await delete_record(db, entry, "WaitlistEntry")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

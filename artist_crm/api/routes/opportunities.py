"""Opportunities — funding calls, and the dashboard's upcoming-deadline list.

Invariants:
    - Listing is ordered by deadline ascending
    - Upcoming window is [now, now + upcoming_deadline_days], capped at upcoming_deadline_limit
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.config import get_settings
from artist_crm.infrastructure.database import get_db
from artist_crm.models.opportunity import Opportunity
from artist_crm.schemas.opportunity import (
    OpportunityCreate, OpportunityResponse, OpportunityUpdate,
)
from artist_crm.services.records import apply_changes, delete_record, get_or_404, save

router = APIRouter(prefix="/api", tags=["opportunities"])


@router.get("/opportunities", response_model=list[OpportunityResponse])
async def list_opportunities(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Opportunity).order_by(Opportunity.deadline))
    return result.scalars().all()


@router.get("/opportunities/{opportunity_id}", response_model=OpportunityResponse)
async def get_opportunity(opportunity_id: UUID, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Opportunity, opportunity_id, "Opportunity")


@router.post(
    "/opportunities", response_model=OpportunityResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_opportunity(body: OpportunityCreate, db: AsyncSession = Depends(get_db)):
    return await save(db, Opportunity(**body.model_dump()))


@router.patch("/opportunities/{opportunity_id}", response_model=OpportunityResponse)
async def update_opportunity(
    opportunity_id: UUID, body: OpportunityUpdate, db: AsyncSession = Depends(get_db),
):
    opportunity = await get_or_404(db, Opportunity, opportunity_id, "Opportunity")
    return await save(db, apply_changes(opportunity, body.changes()))


@router.delete("/opportunities/{opportunity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_opportunity(opportunity_id: UUID, db: AsyncSession = Depends(get_db)):
    opportunity = await get_or_404(db, Opportunity, opportunity_id, "Opportunity")
    await delete_record(db, opportunity, "Opportunity")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/deadlines/upcoming", response_model=list[OpportunityResponse])
async def upcoming_deadlines(db: AsyncSession = Depends(get_db)):
    settings = get_settings()
    now = datetime.now(timezone.utc)
    horizon = now + timedelta(days=settings.upcoming_deadline_days)
    result = await db.execute(
        select(Opportunity)
        .where(Opportunity.deadline >= now)
        .where(Opportunity.deadline <= horizon)
        .order_by(Opportunity.deadline)
        .limit(settings.upcoming_deadline_limit)
    )
    return result.scalars().all()

"""Accompaniment Plans — create and edit an artist's objective and step checklist.

Invariants:
    - Steps are stored with ids (generated when absent)
    - PATCH replaces the whole steps list when steps are sent
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.infrastructure.database import get_db
from artist_crm.models.accompaniment_plan import AccompanimentPlan
from artist_crm.models.artist import Artist
from artist_crm.schemas.plan import PlanCreate, PlanResponse, PlanUpdate, steps_to_json
from artist_crm.services.records import apply_changes, get_or_404, save

router = APIRouter(prefix="/api/plans", tags=["plans"])


@router.post("", response_model=PlanResponse, status_code=status.HTTP_201_CREATED)
async def create_plan(body: PlanCreate, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Artist, body.artist_id, "Artist")
    plan = AccompanimentPlan(
        artist_id=body.artist_id,
        objective=body.objective,
        steps=steps_to_json(body.steps),
    )
    return await save(db, plan)


@router.patch("/{plan_id}", response_model=PlanResponse)
async def update_plan(plan_id: UUID, body: PlanUpdate, db: AsyncSession = Depends(get_db)):
    plan = await get_or_404(db, AccompanimentPlan, plan_id, "AccompanimentPlan")
    return await save(db, apply_changes(plan, body.changes()))

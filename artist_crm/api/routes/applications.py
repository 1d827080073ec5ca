"""Applications — an artist's candidacy to an opportunity.

Invariants:
    - Artist and opportunity must exist on create (404 otherwise)
    - Moving to "submitted" without a submittedDate stamps the current time
"""

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.core.application_lifecycle import submission_date_for
from artist_crm.infrastructure.database import get_db
from artist_crm.models.application import Application
from artist_crm.models.artist import Artist
from artist_crm.models.opportunity import Opportunity
from artist_crm.schemas.opportunity import (
    ApplicationCreate, ApplicationResponse, ApplicationUpdate,
)
from artist_crm.services.records import apply_changes, delete_record, get_or_404, save

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.get("", response_model=list[ApplicationResponse])
async def list_applications(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Application).order_by(Application.created_at.desc()))
    return result.scalars().all()


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(application_id: UUID, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Application, application_id, "Application")


@router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def create_application(body: ApplicationCreate, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Artist, body.artist_id, "Artist")
    await get_or_404(db, Opportunity, body.opportunity_id, "Opportunity")
    data = body.model_dump()
    data["submitted_date"] = submission_date_for(
        data["status"], body.submitted_date, None, datetime.now(timezone.utc),
    )
    return await save(db, Application(**data))


@router.patch("/{application_id}", response_model=ApplicationResponse)
async def update_application(
    application_id: UUID, body: ApplicationUpdate, db: AsyncSession = Depends(get_db),
):
    application = await get_or_404(db, Application, application_id, "Application")
    changes = body.changes()
    if "status" in changes and "submitted_date" not in changes:
        changes["submitted_date"] = submission_date_for(
            changes["status"], None, application.submitted_date,
            datetime.now(timezone.utc),
        )
    return await save(db, apply_changes(application, changes))


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_application(application_id: UUID, db: AsyncSession = Depends(get_db)):
    application = await get_or_404(db, Application, application_id, "Application")
    await delete_record(db, application, "Application")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

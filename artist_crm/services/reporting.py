"""Reporting — dashboard counters in SQL, impact report over loaded rows.

Invariants:
    - Dashboard counters are single aggregate queries (count / coalesce-sum)
    - Impact report delegates all shaping to core/report_aggregation (pure)
"""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.core.domain_types import (
    ACTIVE_TASK_STATUSES, PENDING_APPLICATION_STATUSES, ApplicationStatus,
)
from artist_crm.core.report_aggregation import build_report
from artist_crm.models.application import Application
from artist_crm.models.artist import Artist
from artist_crm.models.task import Task


async def dashboard_stats(db: AsyncSession) -> dict:
    total_artists = await db.scalar(select(func.count(Artist.id)))
    pending = await db.scalar(
        select(func.count(Application.id)).where(
            Application.status.in_([s.value for s in PENDING_APPLICATION_STATUSES]),
        )
    )
    funding = await db.scalar(
        select(func.coalesce(func.sum(Application.funding_amount), 0)).where(
            Application.status == ApplicationStatus.ACCEPTED.value,
        )
    )
    active_tasks = await db.scalar(
        select(func.count(Task.id)).where(
            Task.status.in_([s.value for s in ACTIVE_TASK_STATUSES]),
        )
    )
    return {
        "total_artists": total_artists or 0,
        "pending_applications": pending or 0,
        "total_funding": int(funding or 0),
        "active_tasks": active_tasks or 0,
    }


async def impact_report(
    db: AsyncSession,
    time_range: str | None,
    discipline: str | None,
    now: datetime,
) -> dict:
    artists = (await db.execute(
        select(Artist).order_by(Artist.created_at)
    )).scalars().all()
    applications = (await db.execute(select(Application))).scalars().all()
    return build_report(list(artists), list(applications), time_range, discipline, now)

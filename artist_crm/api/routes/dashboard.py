"""Dashboard — headline counters."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.infrastructure.database import get_db
from artist_crm.schemas.report import DashboardStats
from artist_crm.services.reporting import dashboard_stats

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_stats(db: AsyncSession = Depends(get_db)):
    """totalArtists, pendingApplications (in progress + submitted),
    totalFunding (accepted only), activeTasks (todo + in progress)."""
    return DashboardStats(**await dashboard_stats(db))

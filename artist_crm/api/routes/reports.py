"""Impact Reports — JSON report and its CSV export, filtered by period and discipline.

Invariants:
    - timeRange: month | quarter | year | all; anything else means no period filter
    - discipline: an ArtisticDiscipline value or "all"
    - Export is the same report rendered as BOM-prefixed UTF-8 CSV
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.core.report_aggregation import report_to_csv
from artist_crm.infrastructure.database import get_db
from artist_crm.schemas.report import ImpactReport
from artist_crm.services.reporting import impact_report

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("", response_model=ImpactReport)
async def get_report(
    time_range: str | None = Query(None, alias="timeRange"),
    discipline: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    return await impact_report(db, time_range, discipline, datetime.now(timezone.utc))


@router.get("/export.csv")
async def export_report(
    time_range: str | None = Query(None, alias="timeRange"),
    discipline: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    now = datetime.now(timezone.utc)
    report = await impact_report(db, time_range, discipline, now)
    filename = f"rapport_impact_{now.date().isoformat()}.csv"
    return Response(
        content=report_to_csv(report, time_range, discipline, now.date()),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

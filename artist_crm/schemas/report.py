"""Dashboard & Report Schemas — response shapes of /stats and /reports."""

from artist_crm.schemas.base import CamelModel


class DashboardStats(CamelModel):
    total_artists: int
    pending_applications: int
    total_funding: int
    active_tasks: int


class DisciplineCount(CamelModel):
    discipline: str
    key: str
    count: int


class StatusCount(CamelModel):
    status: str
    key: str
    count: int


class MonthlyFunding(CamelModel):
    month: str
    key: str
    amount: int


class ImpactReport(CamelModel):
    total_artists: int
    total_applications: int
    accepted_applications: int
    total_funding: int
    by_discipline: list[DisciplineCount]
    by_status: list[StatusCount]
    funding_by_month: list[MonthlyFunding]

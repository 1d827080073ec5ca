"""Opportunity & Application Schemas — funding calls and the candidacies to them."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from artist_crm.core.domain_types import ApplicationStatus
from artist_crm.schemas.base import (
    CamelModel, NonEmptyStr, PartialUpdate, ResponseModel, UtcDatetime,
)


class OpportunityCreate(CamelModel):
    title: NonEmptyStr
    description: str | None = None
    type: NonEmptyStr
    eligibility_criteria: str | None = None
    amount: str | None = None
    deadline: UtcDatetime
    url: str | None = None


class OpportunityUpdate(PartialUpdate):
    non_nullable = ("title", "type", "deadline")

    title: NonEmptyStr | None = None
    description: str | None = None
    type: NonEmptyStr | None = None
    eligibility_criteria: str | None = None
    amount: str | None = None
    deadline: UtcDatetime | None = None
    url: str | None = None


class OpportunityResponse(ResponseModel):
    id: UUID
    title: str
    description: str | None
    type: str
    eligibility_criteria: str | None
    amount: str | None
    deadline: datetime
    url: str | None
    created_at: datetime


# --- Applications -------------------------------------------------------------

class ApplicationCreate(CamelModel):
    artist_id: UUID
    opportunity_id: UUID
    status: ApplicationStatus = ApplicationStatus.DRAFT
    funding_amount: int | None = Field(None, ge=0)
    submitted_date: UtcDatetime | None = None
    notes: str | None = None


class ApplicationUpdate(PartialUpdate):
    non_nullable = ("status",)

    status: ApplicationStatus | None = None
    funding_amount: int | None = Field(None, ge=0)
    submitted_date: UtcDatetime | None = None
    notes: str | None = None


class ApplicationResponse(ResponseModel):
    id: UUID
    artist_id: UUID
    opportunity_id: UUID
    status: str
    funding_amount: int | None
    submitted_date: datetime | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

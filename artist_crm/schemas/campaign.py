"""Email Campaign Schemas — campaign body, segment criteria, send outcome.

Invariants:
    - segmentCriteria persisted in camelCase with unset keys dropped
    - sentAt/recipientCount are server-managed: never accepted on create/update
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from artist_crm.core.domain_types import ArtisticDiscipline
from artist_crm.schemas.base import (
    CamelModel, NonEmptyStr, PartialUpdate, ResponseModel,
)


class SegmentCriteria(CamelModel):
    disciplines: list[ArtisticDiscipline] | None = None
    diversity_types: list[str] | None = None
    has_accompaniment: bool | None = None
    min_interactions: int | None = Field(None, ge=0)

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class CampaignCreate(CamelModel):
    name: NonEmptyStr
    subject: NonEmptyStr
    body: NonEmptyStr
    segment_criteria: SegmentCriteria | None = None


class CampaignUpdate(PartialUpdate):
    non_nullable = ("name", "subject", "body")

    name: NonEmptyStr | None = None
    subject: NonEmptyStr | None = None
    body: NonEmptyStr | None = None
    segment_criteria: SegmentCriteria | None = None

    def changes(self) -> dict:
        data = super().changes()
        if "segment_criteria" in data:
            data["segment_criteria"] = (
                self.segment_criteria.to_json() if self.segment_criteria else None
            )
        return data


class CampaignResponse(ResponseModel):
    id: UUID
    name: str
    subject: str
    body: str
    segment_criteria: dict | None
    sent_at: datetime | None
    recipient_count: int
    created_at: datetime


class CampaignRecipient(ResponseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    discipline: str


class CampaignRecipients(CamelModel):
    campaign_id: UUID
    count: int
    recipients: list[CampaignRecipient]

"""Waitlist Schemas — position optional on create (appended to the queue)."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from artist_crm.core.domain_types import WaitlistStatus
from artist_crm.schemas.base import (
    CamelModel, Email, NonEmptyStr, PartialUpdate, ResponseModel, UtcDatetime,
)


class WaitlistCreate(CamelModel):
    first_name: NonEmptyStr
    last_name: NonEmptyStr
    email: Email
    phone: str | None = None
    status: WaitlistStatus = WaitlistStatus.WAITING
    position: int | None = Field(None, ge=1)
    exclusive_link: str | None = None


class WaitlistUpdate(PartialUpdate):
    non_nullable = ("first_name", "last_name", "email", "status", "position")

    first_name: NonEmptyStr | None = None
    last_name: NonEmptyStr | None = None
    email: Email | None = None
    phone: str | None = None
    status: WaitlistStatus | None = None
    position: int | None = Field(None, ge=1)
    exclusive_link: str | None = None
    contacted_at: UtcDatetime | None = None


class WaitlistResponse(ResponseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None
    status: str
    position: int
    exclusive_link: str | None
    contacted_at: datetime | None
    created_at: datetime

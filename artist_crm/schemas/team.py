"""Team Member Schemas."""

from datetime import datetime
from uuid import UUID

from artist_crm.schemas.base import (
    CamelModel, Email, NonEmptyStr, PartialUpdate, ResponseModel,
)


class TeamMemberCreate(CamelModel):
    name: NonEmptyStr
    email: Email
    role: str | None = None
    is_active: bool = True


class TeamMemberUpdate(PartialUpdate):
    non_nullable = ("name", "email", "is_active")

    name: NonEmptyStr | None = None
    email: Email | None = None
    role: str | None = None
    is_active: bool | None = None


class TeamMemberResponse(ResponseModel):
    id: UUID
    name: str
    email: str
    role: str | None
    is_active: bool
    created_at: datetime

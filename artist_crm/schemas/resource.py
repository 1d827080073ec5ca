"""Resource Schemas — venues, equipment, services."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from artist_crm.core.domain_types import ResourceType
from artist_crm.schemas.base import (
    CamelModel, NonEmptyStr, PartialUpdate, ResponseModel,
)


class ResourceCreate(CamelModel):
    name: NonEmptyStr
    type: ResourceType
    description: str | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    address: str | None = None
    website: str | None = None
    pricing: str | None = None
    capacity: int | None = Field(None, ge=0)
    availability: str | None = None
    internal_notes: str | None = None


class ResourceUpdate(PartialUpdate):
    non_nullable = ("name", "type")

    name: NonEmptyStr | None = None
    type: ResourceType | None = None
    description: str | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    address: str | None = None
    website: str | None = None
    pricing: str | None = None
    capacity: int | None = Field(None, ge=0)
    availability: str | None = None
    internal_notes: str | None = None


class ResourceResponse(ResponseModel):
    id: UUID
    name: str
    type: str
    description: str | None
    contact_name: str | None
    contact_email: str | None
    contact_phone: str | None
    address: str | None
    website: str | None
    pricing: str | None
    capacity: int | None
    availability: str | None
    internal_notes: str | None
    created_at: datetime
    updated_at: datetime

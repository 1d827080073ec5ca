"""Artist Schemas — artists and the records kept on their profile page.

Invariants:
    - ArtistCreate: firstName, lastName, email, discipline required
    - discipline validated against ArtisticDiscipline, interaction type against InteractionType
"""

from datetime import datetime
from uuid import UUID

from artist_crm.core.domain_types import ArtisticDiscipline, InteractionType
from artist_crm.schemas.base import (
    CamelModel, Email, NonEmptyStr, PartialUpdate, ResponseModel, UtcDatetime,
)


class ArtistCreate(CamelModel):
    first_name: NonEmptyStr
    last_name: NonEmptyStr
    email: Email
    phone: str | None = None
    discipline: ArtisticDiscipline
    portfolio: str | None = None
    artistic_statement: str | None = None
    diversity_type: str | None = None
    internal_notes: str | None = None
    avatar_url: str | None = None


class ArtistUpdate(PartialUpdate):
    non_nullable = ("first_name", "last_name", "email", "discipline")

    first_name: NonEmptyStr | None = None
    last_name: NonEmptyStr | None = None
    email: Email | None = None
    phone: str | None = None
    discipline: ArtisticDiscipline | None = None
    portfolio: str | None = None
    artistic_statement: str | None = None
    diversity_type: str | None = None
    internal_notes: str | None = None
    avatar_url: str | None = None


class ArtistResponse(ResponseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None
    discipline: str
    portfolio: str | None
    artistic_statement: str | None
    diversity_type: str | None
    internal_notes: str | None
    avatar_url: str | None
    created_at: datetime


# --- Interactions -------------------------------------------------------------

class InteractionCreate(CamelModel):
    artist_id: UUID
    type: InteractionType
    date: UtcDatetime
    title: NonEmptyStr
    notes: str | None = None
    created_by: str | None = None


class InteractionResponse(ResponseModel):
    id: UUID
    artist_id: UUID
    type: str
    date: datetime
    title: str
    notes: str | None
    created_by: str | None
    external_id: str | None
    created_at: datetime


# --- Session notes ------------------------------------------------------------

class ArtistNoteCreate(CamelModel):
    artist_id: UUID
    session_date: UtcDatetime
    content: NonEmptyStr
    author: str | None = None


class ArtistNoteResponse(ResponseModel):
    id: UUID
    artist_id: UUID
    session_date: datetime
    content: str
    author: str | None
    created_at: datetime

"""Outlook Schemas — calendar event payloads and archive/sync requests.

Invariants:
    - Event payloads keep Microsoft Graph field names (already camelCase)
    - subject required; start/end carry {dateTime, timeZone}
"""

from typing import Literal
from uuid import UUID

from artist_crm.schemas.base import CamelModel, Email, NonEmptyStr


class EventTime(CamelModel):
    date_time: NonEmptyStr
    time_zone: NonEmptyStr


class EventLocation(CamelModel):
    display_name: str


class AttendeeAddress(CamelModel):
    address: Email
    name: str | None = None


class EventAttendee(CamelModel):
    email_address: AttendeeAddress
    type: Literal["required", "optional", "resource"]


class EventBody(CamelModel):
    content_type: Literal["text", "html"]
    content: str


class CalendarEventCreate(CamelModel):
    subject: NonEmptyStr
    start: EventTime
    end: EventTime
    location: EventLocation | None = None
    attendees: list[EventAttendee] | None = None
    body: EventBody | None = None

    def to_graph(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ArtistLink(CamelModel):
    """Body of archive/sync: which artist the Outlook item belongs to."""
    artist_id: UUID

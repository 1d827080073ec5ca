"""Document Schemas — registration by URL and the stored record."""

from datetime import datetime
from uuid import UUID

from artist_crm.schemas.base import CamelModel, NonEmptyStr, ResponseModel


class DocumentCreate(CamelModel):
    artist_id: UUID
    title: NonEmptyStr
    type: NonEmptyStr
    file_url: NonEmptyStr


class DocumentResponse(ResponseModel):
    id: UUID
    artist_id: UUID
    title: str
    type: str
    file_url: str
    uploaded_at: datetime

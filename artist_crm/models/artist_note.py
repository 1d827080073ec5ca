"""ArtistNote ORM — free-form notes taken during an accompaniment session.

Invariants:
    - Always belongs to an Artist (artist_id FK, ondelete CASCADE)
    - Listed newest session_date first
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from artist_crm.db.base import Base


class ArtistNote(Base):
    __tablename__ = "artist_notes"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    artist_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("artists.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    session_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    artist: Mapped["Artist"] = relationship(
        "Artist", back_populates="notes",
    )

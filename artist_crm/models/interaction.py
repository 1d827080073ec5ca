"""Interaction ORM — dated touchpoints with an artist (meetings, calls, e-mails).

Invariants:
    - Always belongs to an Artist (artist_id FK, ondelete CASCADE)
    - type holds an InteractionType value
    - external_id set only for records imported from Outlook (message or event id)
    - (artist_id, external_id) is unique; manual entries (NULL external_id) never collide
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from artist_crm.db.base import Base


class Interaction(Base):
    """Interaction entity — one entry of an artist's contact history."""
    __tablename__ = "interactions"
    __table_args__ = (
        UniqueConstraint("artist_id", "external_id", name="uq_interactions_artist_external"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    artist_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("artists.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    type: Mapped[str] = mapped_column(String(30), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(Text, nullable=True)
    external_id: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    artist: Mapped["Artist"] = relationship(
        "Artist", back_populates="interactions",
    )

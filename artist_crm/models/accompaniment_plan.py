"""AccompanimentPlan ORM — an objective broken into checklist steps for one artist.

Invariants:
    - Always belongs to an Artist (artist_id FK, ondelete CASCADE)
    - steps is a JSON list of {id, description, completed, assignedTo?}
    - updated_at bumped on every update
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Text, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from artist_crm.db.base import Base


class AccompanimentPlan(Base):
    __tablename__ = "accompaniment_plans"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    artist_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("artists.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    objective: Mapped[str] = mapped_column(Text, nullable=False)
    steps: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    artist: Mapped["Artist"] = relationship(
        "Artist", back_populates="accompaniment_plans",
    )

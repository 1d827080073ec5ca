"""Application ORM — an artist's candidacy to an opportunity.

Invariants:
    - Belongs to one Artist and one Opportunity (both FK ondelete CASCADE)
    - status holds an ApplicationStatus value, default "draft"
    - funding_amount is the amount obtained; only meaningful once accepted
    - submitted_date drives report time-range filtering and funding-by-month
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from artist_crm.db.base import Base


class Application(Base):
    __tablename__ = "applications"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    artist_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("artists.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    opportunity_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("opportunities.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="draft",
    )
    funding_amount: Mapped[int | None] = mapped_column(Integer, nullable=True)
    submitted_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
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
        "Artist", back_populates="applications",
    )
    opportunity: Mapped["Opportunity"] = relationship(
        "Opportunity", back_populates="applications",
    )

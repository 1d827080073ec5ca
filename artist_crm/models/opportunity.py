"""Opportunity ORM — grants, residencies and calls for projects artists can apply to.

Invariants:
    - deadline is non-nullable (drives the upcoming-deadlines dashboard)
    - amount is free text ("5 000 €", "jusqu'à 10k"): never summed
    - deleting an opportunity cascades to its applications
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from artist_crm.db.base import Base


class Opportunity(Base):
    __tablename__ = "opportunities"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(Text, nullable=False)
    eligibility_criteria: Mapped[str | None] = mapped_column(Text, nullable=True)
    amount: Mapped[str | None] = mapped_column(Text, nullable=True)
    deadline: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    applications: Mapped[list["Application"]] = relationship(
        "Application", back_populates="opportunity",
        cascade="all, delete-orphan",
    )

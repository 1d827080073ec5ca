"""Artist ORM — the aggregate root of the CRM: every artist-scoped record hangs off it.

Invariants:
    - id is UUID primary key (client-side default)
    - first_name, last_name, email, discipline are non-nullable
    - discipline holds an ArtisticDiscipline value
    - deleting an artist cascades to interactions, plans, applications,
      documents, tasks and notes (ORM cascade + FK ondelete)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from artist_crm.db.base import Base


class Artist(Base):
    """Artist followed by the accompaniment team."""
    __tablename__ = "artists"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str | None] = mapped_column(Text, nullable=True)
    discipline: Mapped[str] = mapped_column(String(30), nullable=False)
    portfolio: Mapped[str | None] = mapped_column(Text, nullable=True)
    artistic_statement: Mapped[str | None] = mapped_column(Text, nullable=True)
    diversity_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    internal_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    interactions: Mapped[list["Interaction"]] = relationship(
        "Interaction", back_populates="artist",
        cascade="all, delete-orphan",
    )
    accompaniment_plans: Mapped[list["AccompanimentPlan"]] = relationship(
        "AccompanimentPlan", back_populates="artist",
        cascade="all, delete-orphan",
    )
    applications: Mapped[list["Application"]] = relationship(
        "Application", back_populates="artist",
        cascade="all, delete-orphan",
    )
    documents: Mapped[list["Document"]] = relationship(
        "Document", back_populates="artist",
        cascade="all, delete-orphan",
    )
    tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="artist",
        cascade="all, delete-orphan",
    )
    notes: Mapped[list["ArtistNote"]] = relationship(
        "ArtistNote", back_populates="artist",
        cascade="all, delete-orphan",
    )

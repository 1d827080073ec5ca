"""Initial CRM schema — artists and everything scoped to them, funding, outreach, team.

Revision ID: 001_initial_crm_schema
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial_crm_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False,
        server_default=sa.func.now(),
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at", sa.DateTime(timezone=True), nullable=False,
        server_default=sa.func.now(),
    )


def _artist_fk(nullable: bool = False) -> sa.Column:
    return sa.Column(
        "artist_id", UUID(as_uuid=True),
        sa.ForeignKey("artists.id", ondelete="CASCADE"),
        nullable=nullable, index=True,
    )


def upgrade() -> None:
    op.create_table(
        "artists",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("first_name", sa.Text, nullable=False),
        sa.Column("last_name", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=False),
        sa.Column("phone", sa.Text, nullable=True),
        sa.Column("discipline", sa.String(30), nullable=False),
        sa.Column("portfolio", sa.Text, nullable=True),
        sa.Column("artistic_statement", sa.Text, nullable=True),
        sa.Column("diversity_type", sa.Text, nullable=True),
        sa.Column("internal_notes", sa.Text, nullable=True),
        sa.Column("avatar_url", sa.Text, nullable=True),
        _created_at(),
    )

    op.create_table(
        "interactions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _artist_fk(),
        sa.Column("type", sa.String(30), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_by", sa.Text, nullable=True),
        sa.Column("external_id", sa.String(500), nullable=True),
        _created_at(),
        sa.UniqueConstraint(
            "artist_id", "external_id", name="uq_interactions_artist_external",
        ),
    )

    op.create_table(
        "accompaniment_plans",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _artist_fk(),
        sa.Column("objective", sa.Text, nullable=False),
        sa.Column("steps", sa.JSON, nullable=False),
        _created_at(),
        _updated_at(),
    )

    op.create_table(
        "opportunities",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("type", sa.Text, nullable=False),
        sa.Column("eligibility_criteria", sa.Text, nullable=True),
        sa.Column("amount", sa.Text, nullable=True),
        sa.Column("deadline", sa.DateTime(timezone=True), nullable=False),
        sa.Column("url", sa.Text, nullable=True),
        _created_at(),
    )

    op.create_table(
        "applications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _artist_fk(),
        sa.Column(
            "opportunity_id", UUID(as_uuid=True),
            sa.ForeignKey("opportunities.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("funding_amount", sa.Integer, nullable=True),
        sa.Column("submitted_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        _created_at(),
        _updated_at(),
    )

    op.create_table(
        "documents",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _artist_fk(),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("type", sa.Text, nullable=False),
        sa.Column("file_url", sa.Text, nullable=False),
        sa.Column(
            "uploaded_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
    )

    op.create_table(
        "tasks",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        _artist_fk(nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="todo"),
        sa.Column("priority", sa.String(20), nullable=False, server_default="medium"),
        sa.Column("assigned_to", sa.Text, nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        _updated_at(),
    )

    op.create_table(
        "waitlist",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("first_name", sa.Text, nullable=False),
        sa.Column("last_name", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=False),
        sa.Column("phone", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="waiting"),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("exclusive_link", sa.Text, nullable=True),
        sa.Column("contacted_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
    )

    op.create_table(
        "email_campaigns",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("subject", sa.Text, nullable=False),
        sa.Column("body", sa.Text, nullable=False),
        sa.Column("segment_criteria", sa.JSON, nullable=True),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("recipient_count", sa.Integer, nullable=False, server_default="0"),
        _created_at(),
    )

    op.create_table(
        "resources",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("contact_name", sa.Text, nullable=True),
        sa.Column("contact_email", sa.Text, nullable=True),
        sa.Column("contact_phone", sa.Text, nullable=True),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("website", sa.Text, nullable=True),
        sa.Column("pricing", sa.Text, nullable=True),
        sa.Column("capacity", sa.Integer, nullable=True),
        sa.Column("availability", sa.Text, nullable=True),
        sa.Column("internal_notes", sa.Text, nullable=True),
        _created_at(),
        _updated_at(),
    )

    op.create_table(
        "artist_notes",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _artist_fk(),
        sa.Column("session_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("author", sa.Text, nullable=True),
        _created_at(),
    )

    op.create_table(
        "team_members",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=False, unique=True),
        sa.Column("role", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        _created_at(),
    )


def downgrade() -> None:
    op.drop_table("team_members")
    op.drop_table("artist_notes")
    op.drop_table("resources")
    op.drop_table("email_campaigns")
    op.drop_table("waitlist")
    op.drop_table("tasks")
    op.drop_table("documents")
    op.drop_table("applications")
    op.drop_table("opportunities")
    op.drop_table("accompaniment_plans")
    op.drop_table("interactions")
    op.drop_table("artists")

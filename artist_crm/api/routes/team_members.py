"""Team Members — staff of the organisation.

Invariants:
    - Email is unique (case-insensitive): duplicates answer 409
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.core.errors import ConflictError, ErrorContext
from artist_crm.infrastructure.database import get_db
from artist_crm.models.team_member import TeamMember
from artist_crm.schemas.team import TeamMemberCreate, TeamMemberResponse, TeamMemberUpdate
from artist_crm.services.records import apply_changes, delete_record, get_or_404, save

router = APIRouter(prefix="/api/team-members", tags=["team"])


async def _ensure_email_free(
    db: AsyncSession, email: str, exclude_id: UUID | None = None,
) -> None:
    query = select(TeamMember.id).where(func.lower(TeamMember.email) == email.lower())
    if exclude_id is not None:
        query = query.where(TeamMember.id != exclude_id)
    if (await db.execute(query)).first():
        raise ConflictError(
            f"A team member already uses {email}",
            ErrorContext(entity="TeamMember"),
        )


@router.get("", response_model=list[TeamMemberResponse])
async def list_team_members(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(TeamMember).order_by(TeamMember.name))
    return result.scalars().all()


@router.post("", response_model=TeamMemberResponse, status_code=status.HTTP_201_CREATED)
async def create_team_member(body: TeamMemberCreate, db: AsyncSession = Depends(get_db)):
    await _ensure_email_free(db, body.email)
    return await save(db, TeamMember(**body.model_dump()))


@router.patch("/{member_id}", response_model=TeamMemberResponse)
async def update_team_member(
    member_id: UUID, body: TeamMemberUpdate, db: AsyncSession = Depends(get_db),
):
    member = await get_or_404(db, TeamMember, member_id, "TeamMember")
    changes = body.changes()
    if "email" in changes:
        await _ensure_email_free(db, changes["email"], exclude_id=member_id)
    return await save(db, apply_changes(member, changes))


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team_member(member_id: UUID, db: AsyncSession = Depends(get_db)):
    member = await get_or_404(db, TeamMember, member_id, "TeamMember")
    await delete_record(db, member, "TeamMember")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Tasks — team to-dos, optionally tied to an artist, and the dashboard's "today" list.

Invariants:
    - /tasks/today is declared before /tasks/{task_id} so it is not parsed as an id
    - Today's tasks: todo or in_progress, due within the local calendar day,
      most urgent first then earliest due
"""

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.config import get_settings
from artist_crm.core.domain_types import ACTIVE_TASK_STATUSES
from artist_crm.core.task_schedule import dashboard_sort_key, today_window
from artist_crm.infrastructure.database import get_db
from artist_crm.models.artist import Artist
from artist_crm.models.task import Task
from artist_crm.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from artist_crm.services.records import apply_changes, delete_record, get_or_404, save

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskResponse])
async def list_tasks(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Task).order_by(Task.created_at.desc()))
    return result.scalars().all()


@router.get("/today", response_model=list[TaskResponse])
async def todays_tasks(db: AsyncSession = Depends(get_db)):
    start, end = today_window(datetime.now(timezone.utc), get_settings().local_timezone)
    result = await db.execute(
        select(Task)
        .where(Task.status.in_([s.value for s in ACTIVE_TASK_STATUSES]))
        .where(Task.due_date >= start)
        .where(Task.due_date < end)
    )
    return sorted(result.scalars().all(), key=dashboard_sort_key)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: UUID, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Task, task_id, "Task")


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(body: TaskCreate, db: AsyncSession = Depends(get_db)):
    if body.artist_id is not None:
        await get_or_404(db, Artist, body.artist_id, "Artist")
    return await save(db, Task(**body.model_dump()))


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(task_id: UUID, body: TaskUpdate, db: AsyncSession = Depends(get_db)):
    task = await get_or_404(db, Task, task_id, "Task")
    changes = body.changes()
    if changes.get("artist_id") is not None:
        await get_or_404(db, Artist, changes["artist_id"], "Artist")
    return await save(db, apply_changes(task, changes))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: UUID, db: AsyncSession = Depends(get_db)):
    task = await get_or_404(db, Task, task_id, "Task")
    await delete_record(db, task, "Task")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

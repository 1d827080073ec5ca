"""Task Schemas."""

from datetime import datetime
from uuid import UUID

from artist_crm.core.domain_types import TaskPriority, TaskStatus
from artist_crm.schemas.base import (
    CamelModel, NonEmptyStr, PartialUpdate, ResponseModel, UtcDatetime,
)


class TaskCreate(CamelModel):
    title: NonEmptyStr
    description: str | None = None
    artist_id: UUID | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: str | None = None
    due_date: UtcDatetime | None = None


class TaskUpdate(PartialUpdate):
    non_nullable = ("title", "status", "priority")

    title: NonEmptyStr | None = None
    description: str | None = None
    artist_id: UUID | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assigned_to: str | None = None
    due_date: UtcDatetime | None = None


class TaskResponse(ResponseModel):
    id: UUID
    title: str
    description: str | None
    artist_id: UUID | None
    status: str
    priority: str
    assigned_to: str | None
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime

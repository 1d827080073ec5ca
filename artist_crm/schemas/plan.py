"""Accompaniment Plan Schemas — objective plus checklist steps.

Invariants:
    - Every stored step has an id; steps sent without one get a fresh uuid hex
    - Steps are persisted in wire shape {id, description, completed, assignedTo?}
"""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import Field

from artist_crm.schemas.base import (
    CamelModel, NonEmptyStr, PartialUpdate, ResponseModel,
)


class PlanStep(CamelModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    description: NonEmptyStr
    completed: bool = False
    assigned_to: str | None = None


def steps_to_json(steps: list[PlanStep]) -> list[dict]:
    return [s.model_dump(by_alias=True, exclude_none=True) for s in steps]


class PlanCreate(CamelModel):
    artist_id: UUID
    objective: NonEmptyStr
    steps: list[PlanStep] = []


class PlanUpdate(PartialUpdate):
    non_nullable = ("objective", "steps")

    objective: NonEmptyStr | None = None
    steps: list[PlanStep] | None = None

    def changes(self) -> dict:
        data = super().changes()
        if "steps" in data and self.steps is not None:
            data["steps"] = steps_to_json(self.steps)
        return data


class PlanResponse(ResponseModel):
    id: UUID
    artist_id: UUID
    objective: str
    steps: list[PlanStep]
    created_at: datetime
    updated_at: datetime

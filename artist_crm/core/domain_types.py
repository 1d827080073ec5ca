"""Domain Types — enums and identity types shared by models, schemas, and core logic.

Invariants:
    - Every enumerated column has exactly one Enum here; the DB stores its .value
    - All valid states encoded as Enums — no raw string matching in core logic
    - Enum declaration order is meaningful where noted (report ordering, priority rank)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ArtistId = NewType("ArtistId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class ArtisticDiscipline(str, Enum):
    VISUAL_ARTS = "visual_arts"
    MUSIC = "music"
    THEATER = "theater"
    DANCE = "dance"
    LITERATURE = "literature"
    CINEMA = "cinema"
    DIGITAL_ARTS = "digital_arts"
    MULTIDISCIPLINARY = "multidisciplinary"
    OTHER = "other"


class InteractionType(str, Enum):
    MEETING = "meeting"
    CALL = "call"
    EMAIL = "email"
    CALENDLY_APPOINTMENT = "calendly_appointment"
    OTHER = "other"


class ApplicationStatus(str, Enum):
    """Application lifecycle. Declaration order is the report's byStatus order."""
    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


PENDING_APPLICATION_STATUSES = (
    ApplicationStatus.IN_PROGRESS, ApplicationStatus.SUBMITTED,
)


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ACTIVE_TASK_STATUSES = (TaskStatus.TODO, TaskStatus.IN_PROGRESS)


class TaskPriority(str, Enum):
    """Task urgency. Declaration order is ascending urgency."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class WaitlistStatus(str, Enum):
    WAITING = "waiting"
    CONTACTED = "contacted"
    BOOKED = "booked"
    EXPIRED = "expired"


class ResourceType(str, Enum):
    """External resources: venues, rentable equipment, services (sound, light)."""
    VENUE = "venue"
    EQUIPMENT = "equipment"
    SERVICE = "service"
    OTHER = "other"


class ReportTimeRange(str, Enum):
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    ALL = "all"

"""Task Schedule — today's window and dashboard ordering for tasks.

Invariants:
    - "Today" is [local midnight, next local midnight) in the configured zone,
      returned as UTC bounds
    - Dashboard order: most urgent priority first, then earliest due date
"""

from datetime import datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from artist_crm.core.domain_types import TaskPriority

_PRIORITY_RANK = {p.value: rank for rank, p in enumerate(TaskPriority)}


def today_window(now: datetime, tz_name: str) -> tuple[datetime, datetime]:
    """UTC start/end of the local calendar day containing now."""
    tz = ZoneInfo(tz_name)
    local_now = now.astimezone(tz) if now.tzinfo else now.replace(tzinfo=timezone.utc).astimezone(tz)
    start_local = datetime.combine(local_now.date(), time.min, tzinfo=tz)
    end_local = datetime.combine(local_now.date() + timedelta(days=1), time.min, tzinfo=tz)
    return start_local.astimezone(timezone.utc), end_local.astimezone(timezone.utc)


def priority_rank(priority: str | None) -> int:
    """Higher is more urgent; unknown priorities rank as medium."""
    return _PRIORITY_RANK.get(priority or "", _PRIORITY_RANK[TaskPriority.MEDIUM.value])


def dashboard_sort_key(task) -> tuple:
    due = task.due_date
    if due is not None and due.tzinfo is not None:
        due = due.astimezone(timezone.utc).replace(tzinfo=None)
    return (-priority_rank(task.priority), due or datetime.max)

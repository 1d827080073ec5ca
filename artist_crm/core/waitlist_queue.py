"""Waitlist Queue — position assignment and contact stamping for the waitlist."""

from datetime import datetime

from artist_crm.core.domain_types import WaitlistStatus


def next_position(current_max: int | None) -> int:
    """Position for an entry appended to the end of the queue (1-based)."""
    return (current_max or 0) + 1


def contacted_at_for(
    new_status: str | None, existing: datetime | None, now: datetime,
) -> datetime | None:
    """Stamp the first move to 'contacted'; never overwrite an earlier stamp."""
    if existing is not None:
        return existing
    if new_status == WaitlistStatus.CONTACTED.value:
        return now
    return None

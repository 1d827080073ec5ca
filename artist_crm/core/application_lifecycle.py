"""Application Lifecycle — submission-date stamping for funding applications."""

from datetime import datetime

from artist_crm.core.domain_types import ApplicationStatus


def submission_date_for(
    status: str | None,
    requested: datetime | None,
    existing: datetime | None,
    now: datetime,
) -> datetime | None:
    """Submission date after a write.

    An explicit date always wins. Otherwise moving to "submitted" stamps now,
    unless the application already carries a date.
    """
    if requested is not None:
        return requested
    if existing is not None:
        return existing
    if status == ApplicationStatus.SUBMITTED.value:
        return now
    return None

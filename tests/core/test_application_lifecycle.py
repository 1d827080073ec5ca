"""Application Lifecycle — verifies submission-date stamping."""

from datetime import datetime, timezone

from artist_crm.core.application_lifecycle import submission_date_for

NOW = datetime(2025, 5, 1, tzinfo=timezone.utc)
EARLIER = datetime(2025, 4, 1, tzinfo=timezone.utc)


def test_moving_to_submitted_stamps_now():
    assert submission_date_for("submitted", None, None, NOW) == NOW


def test_explicit_date_wins():
    assert submission_date_for("submitted", EARLIER, None, NOW) == EARLIER


def test_existing_date_is_kept():
    assert submission_date_for("submitted", None, EARLIER, NOW) == EARLIER
    assert submission_date_for("accepted", None, EARLIER, NOW) == EARLIER


def test_drafts_stay_undated():
    assert submission_date_for("draft", None, None, NOW) is None

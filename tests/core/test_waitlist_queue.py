"""Waitlist Queue — verifies queue positions and contact stamping."""

from datetime import datetime, timezone

from artist_crm.core.waitlist_queue import contacted_at_for, next_position

NOW = datetime(2025, 5, 1, tzinfo=timezone.utc)


def test_first_entry_gets_position_one():
    assert next_position(None) == 1


def test_entries_append_after_current_max():
    assert next_position(4) == 5


def test_first_contact_is_stamped():
    assert contacted_at_for("contacted", None, NOW) == NOW


def test_earlier_stamp_is_kept():
    earlier = datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert contacted_at_for("contacted", earlier, NOW) == earlier
    assert contacted_at_for("booked", earlier, NOW) == earlier


def test_other_statuses_do_not_stamp():
    assert contacted_at_for("waiting", None, NOW) is None

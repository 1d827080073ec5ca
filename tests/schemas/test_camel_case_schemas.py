"""Wire Schemas — verifies camelCase aliases, stripping, partial updates, and plan steps."""

import pytest
from pydantic import ValidationError

from artist_crm.schemas.artist import ArtistCreate, ArtistUpdate
from artist_crm.schemas.campaign import CampaignUpdate, SegmentCriteria
from artist_crm.schemas.outlook import CalendarEventCreate
from artist_crm.schemas.plan import PlanCreate, PlanUpdate
from artist_crm.schemas.task import TaskCreate
from artist_crm.schemas.waitlist import WaitlistCreate

ARTIST = {
    "firstName": "  Léa ",
    "lastName": "Martin",
    "email": "lea@example.org",
    "discipline": "dance",
}


def test_artist_create_accepts_camel_case_and_strips():
    artist = ArtistCreate.model_validate(ARTIST)
    assert artist.first_name == "Léa"
    assert artist.discipline == "dance"


def test_artist_create_rejects_blank_name():
    with pytest.raises(ValidationError):
        ArtistCreate.model_validate({**ARTIST, "firstName": "   "})


def test_artist_create_rejects_bad_email():
    with pytest.raises(ValidationError):
        ArtistCreate.model_validate({**ARTIST, "email": "not-an-email"})


def test_artist_create_rejects_unknown_discipline():
    with pytest.raises(ValidationError):
        ArtistCreate.model_validate({**ARTIST, "discipline": "circus"})


def test_update_only_reports_sent_fields():
    update = ArtistUpdate.model_validate({"phone": "0601020304", "internalNotes": None})
    assert update.changes() == {"phone": "0601020304", "internal_notes": None}


def test_update_rejects_null_on_required_column():
    with pytest.raises(ValidationError):
        ArtistUpdate.model_validate({"email": None})


def test_task_defaults_are_plain_values():
    task = TaskCreate.model_validate({"title": "Relancer"})
    assert task.status == "todo"
    assert task.priority == "medium"
    assert task.model_dump()["priority"] == "medium"


def test_waitlist_position_must_be_positive():
    with pytest.raises(ValidationError):
        WaitlistCreate.model_validate({
            "firstName": "A", "lastName": "B", "email": "a@b.fr", "position": 0,
        })


def test_naive_datetime_is_taken_as_utc():
    task = TaskCreate.model_validate({"title": "x", "dueDate": "2025-05-01T09:00:00"})
    assert task.due_date.utcoffset().total_seconds() == 0


def test_plan_steps_get_generated_ids():
    plan = PlanCreate.model_validate({
        "artistId": "3f0e4b4c-6a55-4a7e-9d36-3c4f1f0b9a10",
        "objective": "Préparer la résidence",
        "steps": [{"description": "Écrire la note d'intention"}, {"id": "s2", "description": "Budget"}],
    })
    assert plan.steps[0].id
    assert plan.steps[1].id == "s2"
    assert plan.steps[0].completed is False


def test_plan_update_stores_steps_in_wire_shape():
    update = PlanUpdate.model_validate({
        "steps": [{"id": "s1", "description": "Budget", "completed": True, "assignedTo": "Nadia"}],
    })
    assert update.changes() == {
        "steps": [{"id": "s1", "description": "Budget", "completed": True, "assignedTo": "Nadia"}],
    }


def test_segment_criteria_serialize_camel_case_without_unset_keys():
    criteria = SegmentCriteria.model_validate({"disciplines": ["music"], "hasAccompaniment": False})
    assert criteria.to_json() == {"disciplines": ["music"], "hasAccompaniment": False}


def test_campaign_update_can_clear_criteria():
    assert CampaignUpdate.model_validate({"segmentCriteria": None}).changes() == {
        "segment_criteria": None,
    }


def test_calendar_event_round_trips_graph_field_names():
    event = CalendarEventCreate.model_validate({
        "subject": "Rendez-vous",
        "start": {"dateTime": "2025-05-01T10:00:00", "timeZone": "Europe/Paris"},
        "end": {"dateTime": "2025-05-01T11:00:00", "timeZone": "Europe/Paris"},
        "attendees": [{"emailAddress": {"address": "lea@example.org"}, "type": "required"}],
    })
    assert event.to_graph() == {
        "subject": "Rendez-vous",
        "start": {"dateTime": "2025-05-01T10:00:00", "timeZone": "Europe/Paris"},
        "end": {"dateTime": "2025-05-01T11:00:00", "timeZone": "Europe/Paris"},
        "attendees": [{"emailAddress": {"address": "lea@example.org"}, "type": "required"}],
    }


def test_calendar_event_rejects_unknown_attendee_type():
    with pytest.raises(ValidationError):
        CalendarEventCreate.model_validate({
            "subject": "x",
            "start": {"dateTime": "2025-05-01T10:00:00", "timeZone": "UTC"},
            "end": {"dateTime": "2025-05-01T11:00:00", "timeZone": "UTC"},
            "attendees": [{"emailAddress": {"address": "a@b.fr"}, "type": "vip"}],
        })

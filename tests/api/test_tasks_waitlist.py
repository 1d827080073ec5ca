"""Tasks & Waitlist API — today's dashboard list and queue behaviour."""

from datetime import datetime, timedelta, timezone

from artist_crm.config import get_settings
from artist_crm.core.task_schedule import today_window
from artist_crm.models.task import Task


async def _task(test_db, title, due, priority="medium", status="todo"):
    task = Task(title=title, due_date=due, priority=priority, status=status)
    test_db.add(task)
    await test_db.commit()
    return task


# -- Tasks ---------------------------------------------------------------------

async def test_create_task_for_artist(client, artist):
    res = await client.post("/api/tasks", json={
        "title": "Relancer pour le dossier", "artistId": str(artist.id), "priority": "high",
    })

    assert res.status_code == 201
    assert res.json()["status"] == "todo"
    assert res.json()["priority"] == "high"

    listed = await client.get("/api/tasks")
    assert [t["artistId"] for t in listed.json()] == [str(artist.id)]


async def test_task_with_unknown_priority_is_rejected(client):
    res = await client.post("/api/tasks", json={"title": "X", "priority": "asap"})
    assert res.status_code == 400


async def test_patch_task_status(client, test_db):
    task = await _task(test_db, "Appeler", None)

    res = await client.patch(f"/api/tasks/{task.id}", json={"status": "completed"})

    assert res.json()["status"] == "completed"


async def test_patch_rejects_null_title(client, test_db):
    task = await _task(test_db, "Appeler", None)

    res = await client.patch(f"/api/tasks/{task.id}", json={"title": None})

    assert res.status_code == 400


async def test_today_lists_urgent_first_then_earliest(client, test_db):
    start, end = today_window(datetime.now(timezone.utc), get_settings().local_timezone)
    await _task(test_db, "Moyenne tôt", start + timedelta(hours=1))
    await _task(test_db, "Urgente tard", start + timedelta(hours=20), priority="urgent")
    await _task(test_db, "Haute", start + timedelta(hours=2), priority="high", status="in_progress")
    await _task(test_db, "Faite", start + timedelta(hours=3), status="completed")
    await _task(test_db, "Demain", end + timedelta(hours=1), priority="urgent")
    await _task(test_db, "Hier", start - timedelta(hours=1), priority="urgent")
    await _task(test_db, "Sans échéance", None, priority="urgent")

    res = await client.get("/api/tasks/today")

    assert res.status_code == 200
    assert [t["title"] for t in res.json()] == ["Urgente tard", "Haute", "Moyenne tôt"]


async def test_delete_task(client, test_db):
    task = await _task(test_db, "Appeler", None)

    assert (await client.delete(f"/api/tasks/{task.id}")).status_code == 204
    assert (await client.get(f"/api/tasks/{task.id}")).status_code == 404


# -- Waitlist ------------------------------------------------------------------

def _entry(**overrides):
    body = {"firstName": "Inès", "lastName": "Moreau", "email": "ines@example.org"}
    body.update(overrides)
    return body


async def test_entries_append_to_queue(client):
    first = await client.post("/api/waitlist", json=_entry())
    second = await client.post("/api/waitlist", json=_entry(firstName="Léo", email="leo@example.org"))

    assert first.json()["position"] == 1
    assert second.json()["position"] == 2
    assert first.json()["status"] == "waiting"


async def test_waitlist_ordered_by_position(client):
    await client.post("/api/waitlist", json=_entry(firstName="Troisième", position=3))
    await client.post("/api/waitlist", json=_entry(firstName="Premier", position=1))

    res = await client.get("/api/waitlist")

    assert [e["firstName"] for e in res.json()] == ["Premier", "Troisième"]


async def test_invalid_email_is_rejected(client):
    res = await client.post("/api/waitlist", json=_entry(email="not-an-email"))
    assert res.status_code == 400


async def test_contacted_at_stamped_once(client):
    entry = (await client.post("/api/waitlist", json=_entry())).json()

    contacted = await client.patch(f"/api/waitlist/{entry['id']}", json={"status": "contacted"})
    stamp = contacted.json()["contactedAt"]
    assert stamp is not None

    booked = await client.patch(f"/api/waitlist/{entry['id']}", json={"status": "booked"})
    assert booked.json()["contactedAt"] == stamp


async def test_delete_waitlist_entry(client):
    entry = (await client.post("/api/waitlist", json=_entry())).json()

    assert (await client.delete(f"/api/waitlist/{entry['id']}")).status_code == 204
    assert (await client.get("/api/waitlist")).json() == []

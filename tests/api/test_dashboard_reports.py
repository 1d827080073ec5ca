"""Dashboard stats & impact reports API."""

import csv
import io
from datetime import datetime, timezone

from artist_crm.models.application import Application
from artist_crm.models.task import Task


async def _application(test_db, artist, opportunity, status, amount=None, submitted=None):
    test_db.add(Application(
        artist_id=artist.id, opportunity_id=opportunity.id, status=status,
        funding_amount=amount, submitted_date=submitted,
    ))
    await test_db.commit()


async def test_stats_on_empty_database(client):
    res = await client.get("/api/stats")

    assert res.json() == {
        "totalArtists": 0, "pendingApplications": 0, "totalFunding": 0, "activeTasks": 0,
    }


async def test_stats_counts(client, test_db, artist, opportunity):
    await _application(test_db, artist, opportunity, "submitted")
    await _application(test_db, artist, opportunity, "in_progress")
    await _application(test_db, artist, opportunity, "accepted", 4000)
    await _application(test_db, artist, opportunity, "rejected", 9000)
    test_db.add_all([
        Task(title="A", status="todo"),
        Task(title="B", status="in_progress"),
        Task(title="C", status="completed"),
    ])
    await test_db.commit()

    res = await client.get("/api/stats")

    assert res.json() == {
        "totalArtists": 1, "pendingApplications": 2, "totalFunding": 4000, "activeTasks": 2,
    }


async def test_report_json(client, test_db, make_artist, opportunity):
    musician = await make_artist()
    dancer = await make_artist(email="d@example.org", discipline="dance")
    feb = datetime(2025, 2, 10, tzinfo=timezone.utc)
    await _application(test_db, musician, opportunity, "accepted", 3000, feb)
    await _application(test_db, dancer, opportunity, "accepted", 2000, feb)
    await _application(test_db, dancer, opportunity, "draft")

    res = await client.get("/api/reports", params={"timeRange": "all"})

    body = res.json()
    assert body["totalArtists"] == 2
    assert body["totalApplications"] == 3
    assert body["acceptedApplications"] == 2
    assert body["totalFunding"] == 5000
    assert body["byDiscipline"] == [
        {"discipline": "Musique", "key": "music", "count": 1},
        {"discipline": "Danse", "key": "dance", "count": 1},
    ]
    assert [s["key"] for s in body["byStatus"]] == [
        "draft", "in_progress", "submitted", "accepted", "rejected",
    ]
    assert body["fundingByMonth"] == [{"month": "Fév 2025", "key": "2025-02", "amount": 5000}]


async def test_report_discipline_filter(client, test_db, make_artist, opportunity):
    musician = await make_artist()
    dancer = await make_artist(email="d@example.org", discipline="dance")
    await _application(test_db, musician, opportunity, "accepted", 3000)
    await _application(test_db, dancer, opportunity, "accepted", 2000)

    res = await client.get("/api/reports", params={"discipline": "dance"})

    assert res.json()["totalArtists"] == 1
    assert res.json()["totalFunding"] == 2000


async def test_csv_export(client, artist):
    res = await client.get("/api/reports/export.csv", params={"discipline": "music"})

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")
    today = datetime.now(timezone.utc).date().isoformat()
    assert f'filename="rapport_impact_{today}.csv"' in res.headers["content-disposition"]
    text = res.content.decode("utf-8")
    assert text.startswith("\ufeff")
    rows = list(csv.reader(io.StringIO(text.lstrip("\ufeff"))))
    assert rows[1] == ["Période: Tout"]
    assert rows[2] == ["Discipline: Musique"]
    assert ["Total Artistes", "1"] in rows
    assert ["Musique", "1"] in rows

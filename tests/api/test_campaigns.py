"""Campaigns API — drafts, segment preview, and the one-time BCC send."""

from datetime import datetime, timezone
from uuid import uuid4

import httpx

from artist_crm.infrastructure.outlook_client import (
    OutlookTokenProvider, ResilientOutlookClient, get_outlook_client,
)
from artist_crm.main import app
from artist_crm.models.accompaniment_plan import AccompanimentPlan
from artist_crm.models.email_campaign import EmailCampaign

from tests.fake_graph import FakeGraph


async def _campaign(client, criteria=None):
    body = {"name": "Appel à projets", "subject": "Nouvel appel", "body": "<p>Bonjour</p>"}
    if criteria is not None:
        body["segmentCriteria"] = criteria
    res = await client.post("/api/campaigns", json=body)
    assert res.status_code == 201
    return res.json()


async def test_criteria_stored_in_camel_case(client):
    campaign = await _campaign(client, {"disciplines": ["music"], "hasAccompaniment": True})

    assert campaign["segmentCriteria"] == {"disciplines": ["music"], "hasAccompaniment": True}
    assert campaign["sentAt"] is None
    assert campaign["recipientCount"] == 0


async def test_list_is_newest_first(client, test_db):
    for name, day in [("Printemps", 1), ("Automne", 20), ("Hiver", 10)]:
        test_db.add(EmailCampaign(
            name=name, subject="Lettre", body="<p>Bonjour</p>",
            created_at=datetime(2025, 3, day, tzinfo=timezone.utc),
        ))
    await test_db.commit()

    res = await client.get("/api/campaigns")

    assert [c["name"] for c in res.json()] == ["Automne", "Hiver", "Printemps"]


async def test_get_campaign(client):
    campaign = await _campaign(client)

    res = await client.get(f"/api/campaigns/{campaign['id']}")

    assert res.status_code == 200
    assert res.json()["id"] == campaign["id"]
    assert res.json()["body"] == "<p>Bonjour</p>"
    assert (await client.get(f"/api/campaigns/{uuid4()}")).status_code == 404


async def test_patch_updates_sent_fields_only(client):
    campaign = await _campaign(client, {"disciplines": ["music"]})

    res = await client.patch(f"/api/campaigns/{campaign['id']}", json={
        "subject": "Rappel",
        "segmentCriteria": {"diversityTypes": ["emerging"]},
    })

    assert res.status_code == 200
    assert res.json()["subject"] == "Rappel"
    assert res.json()["name"] == "Appel à projets"
    assert res.json()["segmentCriteria"] == {"diversityTypes": ["emerging"]}

    cleared = await client.patch(
        f"/api/campaigns/{campaign['id']}", json={"segmentCriteria": None},
    )
    assert cleared.json()["segmentCriteria"] is None
    assert cleared.json()["subject"] == "Rappel"


async def test_patch_rejects_null_subject(client):
    campaign = await _campaign(client)

    res = await client.patch(f"/api/campaigns/{campaign['id']}", json={"subject": None})

    assert res.status_code == 400
    assert (await client.get(f"/api/campaigns/{campaign['id']}")).json()["subject"] == "Nouvel appel"


async def test_delete_campaign(client):
    campaign = await _campaign(client)

    res = await client.delete(f"/api/campaigns/{campaign['id']}")

    assert res.status_code == 204
    assert (await client.get(f"/api/campaigns/{campaign['id']}")).status_code == 404
    assert (await client.delete(f"/api/campaigns/{campaign['id']}")).status_code == 404


async def test_recipients_follow_segment(client, test_db, make_artist):
    musician = await make_artist(first_name="Ana", last_name="Bernard", email="ana@example.org")
    await make_artist(first_name="Luc", last_name="Petit", email="luc@example.org", discipline="dance")
    accompanied = await make_artist(first_name="Zoé", last_name="Adam", email="zoe@example.org")
    test_db.add(AccompanimentPlan(artist_id=accompanied.id, objective="Structurer", steps=[]))
    await test_db.commit()

    campaign = await _campaign(client, {"disciplines": ["music"]})
    res = await client.get(f"/api/campaigns/{campaign['id']}/recipients")

    assert res.json()["count"] == 2
    assert [r["lastName"] for r in res.json()["recipients"]] == ["Adam", "Bernard"]

    accompanied_only = await _campaign(client, {"hasAccompaniment": True})
    res = await client.get(f"/api/campaigns/{accompanied_only['id']}/recipients")
    assert [r["id"] for r in res.json()["recipients"]] == [str(accompanied.id)]
    assert str(musician.id) not in [r["id"] for r in res.json()["recipients"]]


async def test_send_bccs_every_recipient_and_stamps(client, graph, make_artist):
    await make_artist(email="ana@example.org")
    await make_artist(email="ANA@example.org")
    await make_artist(email="luc@example.org")
    graph.on("POST", "/me/sendMail", status=202)
    campaign = await _campaign(client)

    res = await client.post(f"/api/campaigns/{campaign['id']}/send")

    assert res.status_code == 200
    assert res.json()["recipientCount"] == 2
    assert res.json()["sentAt"] is not None
    sent = FakeGraph.body(graph.calls("POST", "/me/sendMail")[0])
    assert sent["saveToSentItems"] is True
    assert sent["message"]["subject"] == "Nouvel appel"
    assert sent["message"]["body"] == {"contentType": "HTML", "content": "<p>Bonjour</p>"}
    assert sorted(r["emailAddress"]["address"].lower() for r in sent["message"]["bccRecipients"]) == [
        "ana@example.org", "luc@example.org",
    ]


async def test_second_send_is_conflict(client, graph, artist):
    graph.on("POST", "/me/sendMail", status=202)
    campaign = await _campaign(client)
    await client.post(f"/api/campaigns/{campaign['id']}/send")

    res = await client.post(f"/api/campaigns/{campaign['id']}/send")

    assert res.status_code == 409
    assert len(graph.calls("POST", "/me/sendMail")) == 1


async def test_send_without_recipients_is_rejected(client, graph, artist):
    campaign = await _campaign(client, {"disciplines": ["cinema"]})

    res = await client.post(f"/api/campaigns/{campaign['id']}/send")

    assert res.status_code == 400
    assert graph.calls("POST", "/me/sendMail") == []


async def test_send_when_outlook_not_connected(client, artist):
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(500)))
    disconnected = ResilientOutlookClient(OutlookTokenProvider(http), http)
    app.dependency_overrides[get_outlook_client] = lambda: disconnected
    campaign = await _campaign(client)

    res = await client.post(f"/api/campaigns/{campaign['id']}/send")

    assert res.status_code == 503
    assert res.json()["error"]["code"] == "OUTLOOK_NOT_CONNECTED"
    refreshed = await client.get(f"/api/campaigns/{campaign['id']}")
    assert refreshed.json()["sentAt"] is None
    await http.aclose()


async def test_graph_failure_leaves_campaign_unsent(client, graph, artist):
    graph.on("POST", "/me/sendMail", status=403, json={"error": {"message": "Denied"}})
    campaign = await _campaign(client)

    res = await client.post(f"/api/campaigns/{campaign['id']}/send")

    assert res.status_code == 502
    assert (await client.get(f"/api/campaigns/{campaign['id']}")).json()["sentAt"] is None

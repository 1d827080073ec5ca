"""Resilient Outlook Client — verifies Graph queries, retries, and error mapping.

Tests:
    - OData parameters for mail and calendar queries (select/top/orderby/filter)
    - Single quotes escaped in addresses
    - 429 and 5xx retried, other 4xx fail at once, exhausted retries raise
    - Token provider: static token, connector lookup with caching, not connected
"""

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from artist_crm.core.errors import OutlookAPIError, OutlookNotConnectedError
from artist_crm.infrastructure.outlook_client import (
    OutlookTokenProvider, escape_odata, graph_timestamp,
)

from tests.fake_graph import FakeGraph


@pytest.fixture
def graph():
    return FakeGraph()


# -- Queries -------------------------------------------------------------------

async def test_recent_emails_query(graph):
    graph.on("GET", "/me/messages", json={"value": [{"id": "m1"}]})
    client = graph.client()

    emails = await client.get_recent_emails(top=10)

    assert emails == [{"id": "m1"}]
    request = graph.requests[0]
    assert request.headers["authorization"] == "Bearer test-token"
    assert request.url.params["$top"] == "10"
    assert request.url.params["$orderby"] == "receivedDateTime DESC"
    assert "bodyPreview" in request.url.params["$select"]


async def test_search_emails_escapes_quotes(graph):
    graph.on("GET", "/me/messages", json={"value": []})
    client = graph.client()

    await client.search_emails_by_address("o'neil@example.org")

    odata_filter = graph.requests[0].url.params["$filter"]
    assert "from/emailAddress/address eq 'o''neil@example.org'" in odata_filter
    assert "toRecipients/any(r:r/emailAddress/address eq 'o''neil@example.org')" in odata_filter
    assert graph.requests[0].url.params["$top"] == "20"


async def test_calendar_events_date_filter(graph):
    graph.on("GET", "/me/calendar/events", json={"value": []})
    client = graph.client()

    await client.get_calendar_events(
        start=datetime(2025, 5, 1, tzinfo=timezone.utc),
        end=datetime(2025, 5, 31, 23, 59, tzinfo=timezone.utc),
    )

    params = graph.requests[0].url.params
    assert params["$filter"] == (
        "start/dateTime ge '2025-05-01T00:00:00.000Z' and "
        "end/dateTime le '2025-05-31T23:59:00.000Z'"
    )
    assert params["$orderby"] == "start/dateTime DESC"
    assert params["$top"] == "50"


async def test_calendar_events_without_bounds_has_no_filter(graph):
    graph.on("GET", "/me/calendar/events", json={"value": []})
    await graph.client().get_calendar_events()
    assert "$filter" not in graph.requests[0].url.params


async def test_search_events_by_attendee(graph):
    graph.on("GET", "/me/calendar/events", json={"value": [{"id": "e1"}]})
    events = await graph.client().search_events_by_attendee("lea@example.org")
    assert events == [{"id": "e1"}]
    assert graph.requests[0].url.params["$filter"] == (
        "attendees/any(a:a/emailAddress/address eq 'lea@example.org')"
    )


async def test_send_mail_puts_everyone_in_bcc(graph):
    graph.on("POST", "/me/sendMail", status=202)
    await graph.client().send_mail("Appel à projets", "<p>Bonjour</p>", ["a@x.fr", "b@x.fr"])

    body = FakeGraph.body(graph.requests[0])
    assert body["message"]["subject"] == "Appel à projets"
    assert body["message"]["body"] == {"contentType": "HTML", "content": "<p>Bonjour</p>"}
    assert body["message"]["bccRecipients"] == [
        {"emailAddress": {"address": "a@x.fr"}},
        {"emailAddress": {"address": "b@x.fr"}},
    ]
    assert "toRecipients" not in body["message"]


async def test_create_event_posts_payload(graph):
    graph.on("POST", "/me/calendar/events", status=201, json={"id": "new-event"})
    created = await graph.client().create_calendar_event({"subject": "RDV"})
    assert created == {"id": "new-event"}
    assert FakeGraph.body(graph.requests[0]) == {"subject": "RDV"}


# -- Resilience ----------------------------------------------------------------

async def test_rate_limit_is_retried(graph):
    graph.on("GET", "/me/messages", status=429, headers={"Retry-After": "0"})
    graph.on("GET", "/me/messages", json={"value": [{"id": "m1"}]})

    emails = await graph.client().get_recent_emails()

    assert emails == [{"id": "m1"}]
    assert len(graph.requests) == 2


async def test_server_errors_are_retried_then_raise(graph):
    graph.on("GET", "/me/messages", status=503, json={"error": {"message": "busy"}})

    with pytest.raises(OutlookAPIError) as exc_info:
        await graph.client(max_retries=2).get_recent_emails()

    assert exc_info.value.api_error_type == "connection_error"
    assert exc_info.value.http_status == 502
    assert len(graph.requests) == 3


async def test_exhausted_rate_limit_keeps_retry_after(graph):
    graph.on("GET", "/me/messages", status=429, headers={"Retry-After": "0"})

    with pytest.raises(OutlookAPIError) as exc_info:
        await graph.client(max_retries=1).get_recent_emails()

    assert exc_info.value.api_error_type == "rate_limit"
    assert exc_info.value.status_code == 429


async def test_client_errors_fail_immediately(graph):
    graph.on("GET", "/me/messages/missing", status=404, json={"error": {"message": "Item not found"}})

    with pytest.raises(OutlookAPIError) as exc_info:
        await graph.client().get_email("missing")

    assert exc_info.value.status_code == 404
    assert "Item not found" in exc_info.value.message
    assert exc_info.value.context.entity_id == "missing"
    assert len(graph.requests) == 1


async def test_connection_errors_are_retried():
    attempts = []

    def handler(request):
        attempts.append(request)
        if len(attempts) == 1:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, json={"value": []})

    fake = FakeGraph()
    fake.handler = handler
    assert await fake.client().get_recent_emails() == []
    assert len(attempts) == 2


async def test_backoff_stays_within_jitter_bounds(graph):
    client = graph.client()
    client.base_delay_ms = 1000
    client.max_delay_ms = 8000
    for attempt, nominal in [(0, 1000), (1, 2000), (5, 8000)]:
        delay = client._backoff(attempt)
        assert nominal * 0.75 <= delay <= nominal * 1.25


# -- Token provider ------------------------------------------------------------

def _connector(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_static_token_wins():
    provider = OutlookTokenProvider(_connector(lambda r: httpx.Response(500)), static_token="abc")
    assert await provider.get_token() == "abc"


async def test_not_configured_raises_not_connected():
    provider = OutlookTokenProvider(_connector(lambda r: httpx.Response(500)))
    with pytest.raises(OutlookNotConnectedError):
        await provider.get_token()


async def test_connector_token_is_cached_until_expiry():
    calls = []
    expires = (datetime.now(timezone.utc) + timedelta(hours=1)).isoformat()

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"items": [
            {"settings": {"access_token": "tok-1", "expires_at": expires}},
        ]})

    provider = OutlookTokenProvider(
        _connector(handler), connector_hostname="connectors.test",
        connector_identity="repl abc",
    )
    assert await provider.get_token() == "tok-1"
    assert await provider.get_token() == "tok-1"

    assert len(calls) == 1
    request = calls[0]
    assert request.url.host == "connectors.test"
    assert request.url.path == "/api/v2/connection"
    assert request.url.params["connector_names"] == "outlook"
    assert request.url.params["include_secrets"] == "true"
    assert request.headers["X_REPLIT_TOKEN"] == "repl abc"


async def test_expired_connection_is_fetched_again():
    calls = []
    expired = (datetime.now(timezone.utc) - timedelta(minutes=1)).isoformat()

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"items": [
            {"settings": {"oauth": {"credentials": {"access_token": f"tok-{len(calls)}"}},
                          "expires_at": expired}},
        ]})

    provider = OutlookTokenProvider(
        _connector(handler), connector_hostname="connectors.test", connector_identity="id",
    )
    assert await provider.get_token() == "tok-1"
    assert await provider.get_token() == "tok-2"


async def test_connector_without_token_is_not_connected():
    provider = OutlookTokenProvider(
        _connector(lambda r: httpx.Response(200, json={"items": []})),
        connector_hostname="connectors.test", connector_identity="id",
    )
    with pytest.raises(OutlookNotConnectedError):
        await provider.get_token()


def test_helpers():
    assert escape_odata("d'arc") == "d''arc"
    assert graph_timestamp(datetime(2025, 1, 2, 3, 4, 5, 678000)) == "2025-01-02T03:04:05.678Z"

"""Resilient Outlook Client — Microsoft Graph over httpx with retry, backoff, and error mapping.

Invariants:
    - Every Graph call asks the token provider for a token (tokens expire)
    - Rate limits (429): exponential backoff with jitter, respects Retry-After header
    - Transient errors (5xx, connection): max_retries retries with exponential backoff
    - Client errors (4xx except 429) and timeouts: immediate failure, no retry
    - All Graph failures mapped to OutlookAPIError; missing credentials to
      OutlookNotConnectedError (core/errors.py)

Design Decisions:
    - Token provider separate from the client: static token in dev/tests,
      connector lookup in hosted deployments, same client either way
    - Connector connection cached until its expires_at, then fetched again
    - ±25% jitter on backoff: prevents thundering herd on shared rate limits
"""

import asyncio
import logging
import random
from datetime import datetime, timezone

import httpx

from artist_crm.config import get_settings
from artist_crm.core.errors import (
    ErrorContext, OutlookAPIError, OutlookNotConnectedError,
)

logger = logging.getLogger(__name__)

MESSAGE_LIST_FIELDS = "subject,from,receivedDateTime,bodyPreview,toRecipients,ccRecipients"
MESSAGE_SEARCH_FIELDS = "subject,from,receivedDateTime,bodyPreview,body,toRecipients,ccRecipients"
MESSAGE_DETAIL_FIELDS = "subject,from,receivedDateTime,body,toRecipients,ccRecipients,importance"
EVENT_FIELDS = "subject,start,end,location,attendees,body,organizer,webLink"


def escape_odata(value: str) -> str:
    """Escape a literal for use inside single quotes in an OData $filter."""
    return value.replace("'", "''")


def graph_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


class OutlookTokenProvider:
    """Hands out Graph access tokens from a static token or the connector service."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        static_token: str | None = None,
        connector_hostname: str | None = None,
        connector_identity: str | None = None,
    ):
        self.http = http
        self.static_token = static_token
        self.connector_hostname = connector_hostname
        self.connector_identity = connector_identity
        self._connection: dict | None = None

    async def get_token(self) -> str:
        if self.static_token:
            return self.static_token
        if not self.connector_hostname or not self.connector_identity:
            raise OutlookNotConnectedError()

        if not self._connection_valid():
            self._connection = await self._fetch_connection()

        token = _token_from_connection(self._connection)
        if not token:
            self._connection = None
            raise OutlookNotConnectedError()
        return token

    def _connection_valid(self) -> bool:
        if not self._connection:
            return False
        expires_at = (self._connection.get("settings") or {}).get("expires_at")
        if not expires_at:
            return False
        try:
            expiry = datetime.fromisoformat(expires_at.replace("Z", "+00:00"))
        except (TypeError, ValueError):
            return False
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        return expiry > datetime.now(timezone.utc)

    async def _fetch_connection(self) -> dict | None:
        url = f"https://{self.connector_hostname}/api/v2/connection"
        try:
            response = await self.http.get(
                url,
                params={"include_secrets": "true", "connector_names": "outlook"},
                headers={
                    "Accept": "application/json",
                    "X_REPLIT_TOKEN": self.connector_identity,
                },
            )
        except httpx.HTTPError as e:
            raise OutlookAPIError(
                f"Connector unreachable: {e}", "connector_error",
            )
        if response.status_code >= 400:
            raise OutlookAPIError(
                "Connector refused the request", "connector_error",
                status_code=response.status_code,
            )
        items = response.json().get("items") or []
        return items[0] if items else None


def _token_from_connection(connection: dict | None) -> str | None:
    if not connection:
        return None
    settings = connection.get("settings") or {}
    oauth = settings.get("oauth") or {}
    credentials = oauth.get("credentials") or {}
    return settings.get("access_token") or credentials.get("access_token")


class ResilientOutlookClient:
    """Microsoft Graph mail/calendar client with retry logic and error mapping."""

    def __init__(
        self,
        token_provider: OutlookTokenProvider,
        http: httpx.AsyncClient,
        base_url: str = "https://graph.microsoft.com/v1.0",
        max_retries: int = 3,
        base_delay_ms: int = 500,
        max_delay_ms: int = 8_000,
    ):
        self.token_provider = token_provider
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    # ─── Mail ───────────────────────────────────────────────────

    async def get_recent_emails(self, top: int = 50) -> list[dict]:
        data = await self._request("GET", "/me/messages", params={
            "$top": top,
            "$select": MESSAGE_LIST_FIELDS,
            "$orderby": "receivedDateTime DESC",
        })
        return data.get("value", [])

    async def search_emails_by_address(self, address: str, top: int = 20) -> list[dict]:
        """Messages sent from, or addressed to, the given address."""
        escaped = escape_odata(address)
        data = await self._request("GET", "/me/messages", params={
            "$filter": (
                f"from/emailAddress/address eq '{escaped}' or "
                f"(toRecipients/any(r:r/emailAddress/address eq '{escaped}'))"
            ),
            "$top": top,
            "$select": MESSAGE_SEARCH_FIELDS,
            "$orderby": "receivedDateTime DESC",
        })
        return data.get("value", [])

    async def get_email(self, message_id: str) -> dict:
        return await self._request(
            "GET", f"/me/messages/{message_id}",
            params={"$select": MESSAGE_DETAIL_FIELDS},
            context=ErrorContext(entity="OutlookMessage", entity_id=message_id),
        )

    async def send_mail(self, subject: str, body: str, bcc: list[str]) -> None:
        """Send one HTML message with every recipient in BCC."""
        await self._request("POST", "/me/sendMail", json={
            "message": {
                "subject": subject,
                "body": {"contentType": "HTML", "content": body},
                "bccRecipients": [
                    {"emailAddress": {"address": address}} for address in bcc
                ],
            },
            "saveToSentItems": True,
        })

    # ─── Calendar ───────────────────────────────────────────────

    async def get_calendar_events(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        top: int = 50,
    ) -> list[dict]:
        params = {
            "$top": top,
            "$select": EVENT_FIELDS,
            "$orderby": "start/dateTime DESC",
        }
        filters = []
        if start:
            filters.append(f"start/dateTime ge '{graph_timestamp(start)}'")
        if end:
            filters.append(f"end/dateTime le '{graph_timestamp(end)}'")
        if filters:
            params["$filter"] = " and ".join(filters)
        data = await self._request("GET", "/me/calendar/events", params=params)
        return data.get("value", [])

    async def search_events_by_attendee(self, address: str, top: int = 20) -> list[dict]:
        escaped = escape_odata(address)
        data = await self._request("GET", "/me/calendar/events", params={
            "$filter": f"attendees/any(a:a/emailAddress/address eq '{escaped}')",
            "$top": top,
            "$select": EVENT_FIELDS,
            "$orderby": "start/dateTime DESC",
        })
        return data.get("value", [])

    async def get_event(self, event_id: str) -> dict:
        return await self._request(
            "GET", f"/me/calendar/events/{event_id}",
            params={"$select": EVENT_FIELDS},
            context=ErrorContext(entity="OutlookEvent", entity_id=event_id),
        )

    async def create_calendar_event(self, event: dict) -> dict:
        return await self._request("POST", "/me/calendar/events", json=event)

    # ─── Transport ──────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: dict | None = None,
        context: ErrorContext | None = None,
    ) -> dict:
        """Perform a Graph call with automatic retry on transient failures."""
        for attempt in range(self.max_retries + 1):
            token = await self.token_provider.get_token()
            try:
                response = await self.http.request(
                    method, f"{self.base_url}{path}",
                    params=params, json=json,
                    headers={
                        "Authorization": f"Bearer {token}",
                        "Accept": "application/json",
                    },
                )
            except httpx.TimeoutException:
                raise OutlookAPIError("API timeout", "timeout", context=context)
            except httpx.TransportError as e:
                await self._handle_transient_error(e, attempt, context)
                continue

            if response.status_code == 429:
                await self._handle_rate_limit(response, attempt, context)
                continue
            if response.status_code >= 500:
                await self._handle_transient_error(
                    f"HTTP {response.status_code}", attempt, context,
                )
                continue
            if response.status_code >= 400:
                raise OutlookAPIError(
                    _graph_error_message(response), "client_error",
                    status_code=response.status_code, context=context,
                )

            logger.info(
                f"Outlook API success: {method} {path}",
                extra={"attempt": attempt + 1, "status_code": response.status_code},
            )
            if response.status_code in (202, 204) or not response.content:
                return {}
            return response.json()

    async def _handle_rate_limit(
        self, response: httpx.Response, attempt: int, context: ErrorContext | None,
    ) -> None:
        """Handle rate limit response with retry or raise."""
        retry_after_ms = self._extract_retry_after(response)
        if attempt >= self.max_retries:
            raise OutlookAPIError(
                "Rate limit exceeded after retries",
                "rate_limit",
                status_code=429,
                retry_after_ms=retry_after_ms,
                context=context,
            )
        delay = retry_after_ms or self._backoff(attempt)
        logger.warning(
            f"Rate limit hit, retry after {delay}ms (attempt {attempt + 1})",
        )
        await asyncio.sleep(delay / 1000)

    async def _handle_transient_error(
        self, e: object, attempt: int, context: ErrorContext | None,
    ) -> None:
        """Handle transient errors with retry or raise."""
        if attempt >= self.max_retries:
            raise OutlookAPIError(
                f"Transient failure after {self.max_retries} retries: {e}",
                "connection_error",
                context=context,
            )
        delay = self._backoff(attempt)
        logger.warning(f"Transient error, retry after {delay}ms: {e}")
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    def _extract_retry_after(self, response: httpx.Response) -> int | None:
        """Extract Retry-After header (returns milliseconds)."""
        val = response.headers.get("retry-after")
        if val and val.strip().isdigit():
            return int(val) * 1000
        return None

    async def aclose(self) -> None:
        await self.http.aclose()


def _graph_error_message(response: httpx.Response) -> str:
    try:
        error = response.json().get("error") or {}
    except ValueError:
        return f"HTTP {response.status_code}"
    return error.get("message") or f"HTTP {response.status_code}"


# Singleton (created on first use, closed on shutdown)
_outlook_client: ResilientOutlookClient | None = None


def build_outlook_client(transport: httpx.AsyncBaseTransport | None = None) -> ResilientOutlookClient:
    settings = get_settings()
    http = httpx.AsyncClient(
        timeout=settings.outlook_timeout_seconds, transport=transport,
    )
    provider = OutlookTokenProvider(
        http,
        static_token=settings.outlook_access_token,
        connector_hostname=settings.outlook_connector_hostname,
        connector_identity=settings.outlook_connector_identity,
    )
    return ResilientOutlookClient(
        provider,
        http,
        base_url=settings.outlook_graph_base_url,
        max_retries=settings.outlook_max_retries,
        base_delay_ms=settings.outlook_base_delay_ms,
        max_delay_ms=settings.outlook_max_delay_ms,
    )


def get_outlook_client() -> ResilientOutlookClient:
    """FastAPI dependency for the Graph client."""
    global _outlook_client
    if _outlook_client is None:
        _outlook_client = build_outlook_client()
    return _outlook_client


async def close_outlook_client() -> None:
    global _outlook_client
    if _outlook_client is not None:
        await _outlook_client.aclose()
        _outlook_client = None

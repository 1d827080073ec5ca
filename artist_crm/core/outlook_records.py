"""Outlook Records — turn Graph messages and events into interaction fields.

Invariants:
    - Archived mail becomes an "email" interaction, synced events a "meeting"
    - external_id is the Graph id, so the same item is never stored twice per artist
    - Graph timestamps carry up to 7 fractional digits and an optional separate
      timeZone; the result is always an aware UTC datetime
    - Unknown (e.g. Windows-style) zone names fall back to UTC
"""

import re
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from artist_crm.core.domain_types import InteractionType

OUTLOOK_AUTHOR = "Outlook"
NOTES_MAX_CHARS = 500

_FRACTION = re.compile(r"\.(\d+)")
_TAGS = re.compile(r"<[^>]+>")
_SPACES = re.compile(r"\s+")


def parse_graph_datetime(value: str, tz_name: str | None = None) -> datetime:
    text = value.strip().replace("Z", "+00:00")
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=_zone(tz_name))
    return moment.astimezone(timezone.utc)


def _zone(tz_name: str | None):
    if not tz_name or tz_name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def plain_text(html: str | None) -> str:
    if not html:
        return ""
    return _SPACES.sub(" ", _TAGS.sub(" ", html)).strip()


def interaction_from_message(message: dict) -> dict:
    return {
        "type": InteractionType.EMAIL.value,
        "title": message.get("subject") or "(sans objet)",
        "date": parse_graph_datetime(message["receivedDateTime"]),
        "notes": message.get("bodyPreview") or None,
        "created_by": OUTLOOK_AUTHOR,
        "external_id": message["id"],
    }


def interaction_from_event(event: dict) -> dict:
    start = event.get("start") or {}
    parts = []
    location = (event.get("location") or {}).get("displayName")
    if location:
        parts.append(f"Lieu: {location}")
    body = plain_text((event.get("body") or {}).get("content"))
    if body:
        parts.append(body[:NOTES_MAX_CHARS])
    return {
        "type": InteractionType.MEETING.value,
        "title": event.get("subject") or "(sans titre)",
        "date": parse_graph_datetime(start["dateTime"], start.get("timeZone")),
        "notes": "\n".join(parts) or None,
        "created_by": OUTLOOK_AUTHOR,
        "external_id": event["id"],
    }

"""Campaign Segments — pure matching of artists against a campaign's segment criteria.

Invariants:
    - An artist matches when EVERY present criterion holds
    - Absent keys, None values, and empty lists impose no constraint
    - hasAccompaniment True requires >= 1 plan; False requires none
    - minInteractions compares against the artist's interaction count (>=)
"""

from dataclasses import dataclass

from artist_crm.core.repository_protocols import ArtistLike


@dataclass(frozen=True)
class ArtistEngagement:
    """Per-artist counts the segment rules need besides the artist row itself."""
    plan_count: int = 0
    interaction_count: int = 0


def matches_segment(
    artist: ArtistLike, engagement: ArtistEngagement, criteria: dict | None,
) -> bool:
    if not criteria:
        return True

    disciplines = criteria.get("disciplines") or []
    if disciplines and artist.discipline not in disciplines:
        return False

    diversity_types = criteria.get("diversityTypes") or []
    if diversity_types and artist.diversity_type not in diversity_types:
        return False

    has_accompaniment = criteria.get("hasAccompaniment")
    if has_accompaniment is not None:
        if bool(has_accompaniment) != (engagement.plan_count > 0):
            return False

    min_interactions = criteria.get("minInteractions")
    if min_interactions is not None and engagement.interaction_count < min_interactions:
        return False

    return True


def select_recipients(
    artists: list[ArtistLike],
    engagement: dict,
    criteria: dict | None,
) -> list[ArtistLike]:
    """Artists matching criteria, in input order. engagement is keyed by artist id."""
    empty = ArtistEngagement()
    return [
        a for a in artists
        if matches_segment(a, engagement.get(a.id, empty), criteria)
    ]


def unique_addresses(artists: list[ArtistLike]) -> list[str]:
    """Recipient e-mail addresses, case-insensitively deduplicated, first spelling kept."""
    seen: set[str] = set()
    addresses = []
    for artist in artists:
        key = artist.email.strip().lower()
        if key and key not in seen:
            seen.add(key)
            addresses.append(artist.email.strip())
    return addresses

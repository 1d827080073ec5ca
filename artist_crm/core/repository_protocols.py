"""Boundary Protocols — structural contracts for rows handed to core functions.

Invariants:
    - Core NEVER imports from models/ — ORM rows satisfy these protocols structurally
    - Only the attributes core logic reads are declared

Design Decisions:
    - Protocol over ABC: ORM classes and plain test doubles both qualify without inheritance
"""

from datetime import datetime
from typing import Protocol

from artist_crm.core.domain_types import ArtistId


class ArtistLike(Protocol):
    """Artist attributes read by reporting and campaign segmentation."""
    id: ArtistId
    email: str
    discipline: str | None
    diversity_type: str | None


class ApplicationLike(Protocol):
    """Application attributes read by report aggregation."""
    artist_id: ArtistId
    status: str | None
    funding_amount: int | None
    submitted_date: datetime | None

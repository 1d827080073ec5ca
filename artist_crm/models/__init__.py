"""ORM Models — SQLAlchemy declarative models for all CRM entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Artist is the aggregate root for artist-scoped records

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from artist_crm.models.artist import Artist  # noqa: F401
from artist_crm.models.interaction import Interaction  # noqa: F401
from artist_crm.models.accompaniment_plan import AccompanimentPlan  # noqa: F401
from artist_crm.models.opportunity import Opportunity  # noqa: F401
from artist_crm.models.application import Application  # noqa: F401
from artist_crm.models.document import Document  # noqa: F401
from artist_crm.models.task import Task  # noqa: F401
from artist_crm.models.waitlist_entry import WaitlistEntry  # noqa: F401
from artist_crm.models.email_campaign import EmailCampaign  # noqa: F401
from artist_crm.models.resource import Resource  # noqa: F401
from artist_crm.models.artist_note import ArtistNote  # noqa: F401
from artist_crm.models.team_member import TeamMember  # noqa: F401

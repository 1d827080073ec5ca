"""Record Helpers — lookup-or-404, partial update, and delete shared by every resource route.

Invariants:
    - get_or_404 raises ResourceNotFoundError (never returns None)
    - apply_changes writes only the attributes present in the change set
    - delete_record goes through AsyncSession.delete so ORM cascades run
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.core.errors import ResourceNotFoundError
from artist_crm.db.base import Base

logger = logging.getLogger(__name__)


async def get_or_404(db: AsyncSession, model: type[Base], record_id: uuid.UUID, label: str):
    record = await db.get(model, record_id)
    if record is None:
        raise ResourceNotFoundError(label, str(record_id))
    return record


def apply_changes(record: Base, changes: dict) -> Base:
    for name, value in changes.items():
        setattr(record, name, value)
    if hasattr(record, "updated_at"):
        record.updated_at = datetime.now(timezone.utc)
    return record


async def save(db: AsyncSession, record: Base) -> Base:
    db.add(record)
    await db.commit()
    await db.refresh(record)
    return record


async def delete_record(db: AsyncSession, record: Base, label: str) -> None:
    await db.delete(record)
    await db.commit()
    logger.info(
        f"{label} deleted",
        extra={"entity": label, "entity_id": str(record.id)},
    )

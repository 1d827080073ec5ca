"""Resources — venues, equipment and services the team can point artists to."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.core.domain_types import ResourceType
from artist_crm.infrastructure.database import get_db
from artist_crm.models.resource import Resource
from artist_crm.schemas.resource import ResourceCreate, ResourceResponse, ResourceUpdate
from artist_crm.services.records import apply_changes, delete_record, get_or_404, save

router = APIRouter(prefix="/api/resources", tags=["resources"])


@router.get("", response_model=list[ResourceResponse])
async def list_resources(
    resource_type: ResourceType | None = Query(None, alias="type"),
    db: AsyncSession = Depends(get_db),
):
    """All resources newest first, or one type ordered by name."""
    query = select(Resource)
    if resource_type:
        query = query.where(Resource.type == resource_type.value).order_by(Resource.name)
    else:
        query = query.order_by(Resource.created_at.desc())
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{resource_id}", response_model=ResourceResponse)
async def get_resource(resource_id: UUID, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Resource, resource_id, "Resource")


@router.post("", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED)
async def create_resource(body: ResourceCreate, db: AsyncSession = Depends(get_db)):
    return await save(db, Resource(**body.model_dump()))


@router.patch("/{resource_id}", response_model=ResourceResponse)
async def update_resource(
    resource_id: UUID, body: ResourceUpdate, db: AsyncSession = Depends(get_db),
):
    resource = await get_or_404(db, Resource, resource_id, "Resource")
    return await save(db, apply_changes(resource, body.changes()))


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resource(resource_id: UUID, db: AsyncSession = Depends(get_db)):
    resource = await get_or_404(db, Resource, resource_id, "Resource")
    await delete_record(db, resource, "Resource")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Documents — multipart upload, registration by URL, and removal.

Invariants:
    - Upload checks run in order: file present, fields present, artist exists,
      MIME type allowed, size within limit; nothing is stored on rejection
    - A stored upload is removed again when its Document row cannot be saved
    - Deleting a document removes the stored file when it lives under /uploads/
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from artist_crm.config import get_settings
from artist_crm.core.errors import UploadRejectedError
from artist_crm.infrastructure.database import get_db
from artist_crm.models.artist import Artist
from artist_crm.models.document import Document
from artist_crm.schemas.document import DocumentCreate, DocumentResponse
from artist_crm.services.document_storage import (
    check_mime_type, remove_stored_file, store_upload,
)
from artist_crm.services.records import delete_record, get_or_404, save

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.post("/upload", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: UploadFile | None = File(None),
    title: str | None = Form(None),
    doc_type: str | None = Form(None, alias="type"),
    artist_id: str | None = Form(None, alias="artistId"),
    db: AsyncSession = Depends(get_db),
):
    """Store an uploaded file and record it on the artist."""
    settings = get_settings()
    if file is None or not file.filename:
        raise UploadRejectedError("No file uploaded", "missing_file")
    if not (title and title.strip()) or not (doc_type and doc_type.strip()) or not artist_id:
        raise UploadRejectedError("Missing required fields", "missing_fields")
    try:
        artist_uuid = UUID(artist_id)
    except ValueError:
        raise UploadRejectedError("Invalid artistId", "missing_fields")

    await get_or_404(db, Artist, artist_uuid, "Artist")
    check_mime_type(file, settings.upload_allowed_mime_types)
    file_url = await store_upload(file, settings.uploads_dir, settings.upload_max_bytes)

    document = Document(
        artist_id=artist_uuid, title=title.strip(), type=doc_type.strip(), file_url=file_url,
    )
    try:
        return await save(db, document)
    except Exception:
        remove_stored_file(file_url, settings.uploads_dir)
        logger.warning(
            "Document insert failed, stored upload removed",
            extra={"entity": "Document", "path": file_url},
        )
        raise


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(body: DocumentCreate, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Artist, body.artist_id, "Artist")
    return await save(db, Document(**body.model_dump()))


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(document_id: UUID, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Document, document_id, "Document")


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(document_id: UUID, db: AsyncSession = Depends(get_db)):
    document = await get_or_404(db, Document, document_id, "Document")
    file_url = document.file_url
    await delete_record(db, document, "Document")
    remove_stored_file(file_url, get_settings().uploads_dir)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

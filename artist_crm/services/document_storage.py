"""Document Storage — validates and writes uploaded files under the uploads directory.

Invariants:
    - Only allowed MIME types are stored; anything else is rejected before writing
    - A file larger than the byte limit is never left on disk
    - Stored names are unique: <field>-<epoch_ms>-<random><ext>
    - remove_stored_file only touches files under the uploads directory
"""

import logging
import os
import random
import time
from pathlib import Path

from fastapi import UploadFile

from artist_crm.core.errors import UploadRejectedError

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads/"
_CHUNK_BYTES = 64 * 1024


def unique_filename(field_name: str, original_name: str | None) -> str:
    suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"  # nosec B311
    ext = Path(original_name or "").suffix
    return f"{field_name}-{suffix}{ext}"


def check_mime_type(upload: UploadFile, allowed: list[str]) -> None:
    if upload.content_type not in allowed:
        raise UploadRejectedError(
            "Type de fichier non autorisé. Seuls PDF, DOC, DOCX, JPG et PNG sont acceptés.",
            "mime_type",
        )


async def store_upload(
    upload: UploadFile,
    uploads_dir: str,
    max_bytes: int,
    field_name: str = "file",
) -> str:
    """Write the upload to disk and return its public URL (/uploads/<name>)."""
    directory = Path(uploads_dir)
    directory.mkdir(parents=True, exist_ok=True)
    name = unique_filename(field_name, upload.filename)
    target = directory / name

    written = 0
    with target.open("wb") as out:
        while chunk := await upload.read(_CHUNK_BYTES):
            written += len(chunk)
            if written > max_bytes:
                break
            out.write(chunk)

    if written > max_bytes:
        target.unlink(missing_ok=True)
        raise UploadRejectedError(
            f"Fichier trop volumineux (max {max_bytes // (1024 * 1024)}MB)",
            "file_size",
        )

    logger.info(f"Stored upload {name} ({written} bytes)")
    return f"{UPLOADS_URL_PREFIX}{name}"


def remove_stored_file(file_url: str, uploads_dir: str) -> bool:
    """Delete the file behind an /uploads/ URL. External URLs are left alone."""
    if not file_url.startswith(UPLOADS_URL_PREFIX):
        return False
    name = file_url[len(UPLOADS_URL_PREFIX):]
    if not name or name != os.path.basename(name):
        return False
    path = Path(uploads_dir) / name
    if not path.is_file():
        return False
    path.unlink()
    logger.info(f"Removed stored upload {name}")
    return True

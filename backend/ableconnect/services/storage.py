"""
Disk storage for uploaded resumes and certificates.

Files land in ``<UPLOAD_DIR>/resumes`` or ``<UPLOAD_DIR>/certificates`` under
a timestamp-prefixed name. Only PDF/DOC/DOCX up to MAX_UPLOAD_SIZE bytes.
"""

import logging
import os
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from ableconnect.core.config import settings
from ableconnect.core.exceptions import ValidationFailed

logger = logging.getLogger("storage")

ALLOWED_EXTENSIONS = (".pdf", ".doc", ".docx")

MIME_TYPES = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

# Upload field name -> subdirectory
KINDS = {
    "resume": "resumes",
    "certificate": "certificates",
}


@dataclass
class PendingUpload:
    """An upload that passed validation and is held in memory until saved."""

    kind: str
    original_name: str
    content: bytes


def media_type_for(filename: str) -> str:
    return MIME_TYPES.get(Path(filename).suffix.lower(), "application/octet-stream")


class FileStorage:
    def __init__(self, root: str, max_size: int = 5 * 1024 * 1024):
        self.root = Path(root)
        self.max_size = max_size

    def directory(self, kind: str) -> Path:
        if kind not in KINDS:
            raise ValueError(f"Unknown upload kind: {kind}")
        path = self.root / KINDS[kind]
        path.mkdir(parents=True, exist_ok=True)
        return path

    async def read_upload(self, kind: str, upload: Optional[UploadFile]) -> Optional[PendingUpload]:
        """
        Validate an incoming file and read it into memory.

        Returns None when no file was sent. Nothing touches the disk here, so
        a request rejected after this step leaves no files behind.
        """
        if upload is None or not upload.filename:
            return None

        original_name = Path(upload.filename).name
        if Path(original_name).suffix.lower() not in ALLOWED_EXTENSIONS:
            raise ValidationFailed("Only PDF, DOC, and DOCX files are allowed")

        content = await upload.read(self.max_size + 1)
        if len(content) > self.max_size:
            raise ValidationFailed(
                f"File too large. Maximum size is {self.max_size // (1024 * 1024)}MB"
            )

        return PendingUpload(kind=kind, original_name=original_name, content=content)

    def save(self, pending: PendingUpload) -> str:
        """Write a validated upload to disk and return the stored filename."""
        unique_prefix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        filename = f"{unique_prefix}-{pending.original_name}"
        destination = self.directory(pending.kind) / filename
        destination.write_bytes(pending.content)
        logger.info(f"Stored {pending.kind} upload as {filename}")
        return filename

    def resolve(self, kind: str, filename: str) -> Optional[Path]:
        """Map a stored filename back to a path, or None if it does not exist."""
        if not filename or Path(filename).name != filename:
            return None
        path = self.directory(kind) / filename
        if not path.is_file():
            return None
        return path

    def delete(self, kind: str, filename: Optional[str]) -> None:
        """Best-effort removal of a superseded or orphaned file."""
        if not filename:
            return
        path = self.resolve(kind, filename)
        if path is None:
            return
        try:
            os.unlink(path)
        except OSError as e:
            logger.warning(f"Could not delete {kind} file {filename}: {str(e)}")


def build_storage() -> FileStorage:
    return FileStorage(settings.UPLOAD_DIR, max_size=settings.MAX_UPLOAD_SIZE)

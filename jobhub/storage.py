"""
Local file storage for application documents.

Files are written under ``settings.upload_dir`` with a random name and served
back under ``settings.upload_url_prefix``.
"""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

from jobhub.config import settings
from jobhub.errors import PersistenceError, ValidationError

logger = logging.getLogger(__name__)


class StorageError(PersistenceError):
    """A stored file could not be written or removed."""


@dataclass
class IncomingFile:
    """An uploaded file as received from the client, fully read."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix.lower().lstrip(".")


@dataclass
class StoredFile:
    """A file written to storage."""

    url: str
    name: str
    size: int
    path: Path


def upload_root() -> Path:
    return Path(settings.upload_dir)


def ensure_upload_dir() -> Path:
    root = upload_root()
    root.mkdir(parents=True, exist_ok=True)
    return root


def path_for_url(url: str) -> Path:
    """Map a public document url back to its file on disk."""
    # Only the basename is trusted, so urls can't escape the upload dir
    return upload_root() / Path(url).name


def validate_upload(incoming: IncomingFile) -> None:
    """Reject files with a disallowed extension or over the size limit."""
    allowed = settings.allowed_extension_set
    if not incoming.filename or incoming.extension not in allowed:
        raise ValidationError.for_field(
            "documents",
            f"File type not allowed: {incoming.filename or '<unnamed>'}. "
            f"Allowed: {', '.join(sorted(allowed))}",
        )
    if incoming.size > settings.max_upload_size:
        limit_mb = settings.max_upload_size / (1024 * 1024)
        raise ValidationError.for_field(
            "documents",
            f"File too large: {incoming.filename}. Maximum size is {limit_mb:g}MB",
        )


def validate_uploads(files: list[IncomingFile]) -> None:
    if len(files) > settings.max_files_per_request:
        raise ValidationError.for_field(
            "documents", f"Too many files. At most {settings.max_files_per_request} per request"
        )
    for incoming in files:
        validate_upload(incoming)


def save_upload(incoming: IncomingFile) -> StoredFile:
    """Write a validated upload to disk under a fresh random name."""
    root = ensure_upload_dir()
    stored_name = f"{uuid.uuid4().hex}.{incoming.extension}"
    path = root / stored_name
    try:
        path.write_bytes(incoming.content)
    except OSError as e:
        logger.exception(f"Failed to write upload {incoming.filename} to {path}")
        raise StorageError() from e

    prefix = settings.upload_url_prefix.rstrip("/")
    return StoredFile(
        url=f"{prefix}/{stored_name}",
        name=Path(incoming.filename).name,
        size=incoming.size,
        path=path,
    )


def save_uploads(files: list[IncomingFile]) -> list[StoredFile]:
    """Write all uploads, removing the ones already written if any write fails."""
    stored: list[StoredFile] = []
    try:
        for incoming in files:
            stored.append(save_upload(incoming))
    except StorageError:
        discard(stored)
        raise
    return stored


def delete_stored(url: str) -> None:
    """Remove the file behind a document url. A missing file counts as removed."""
    path = path_for_url(url)
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning(f"Stored file already missing: {path}")
    except OSError as e:
        logger.exception(f"Failed to delete stored file {path}")
        raise StorageError() from e


def discard(stored: list[StoredFile]) -> None:
    """Remove files written earlier in a request that is now failing."""
    for item in stored:
        try:
            item.path.unlink(missing_ok=True)
        except OSError:
            # Leaves an orphaned file; the original error is what gets reported
            logger.exception(f"Could not clean up orphaned upload {item.path}")

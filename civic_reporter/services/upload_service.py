"""Photo upload storage."""

from __future__ import annotations

import logging
import os
import secrets
import time
from pathlib import Path
from typing import BinaryIO

from fastapi import UploadFile

from civic_reporter.core.config import settings
from civic_reporter.core.errors import UploadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
NAME_ATTEMPTS = 5


def upload_root() -> Path:
    return Path(settings.upload_dir)


def ensure_upload_dir() -> Path:
    root = upload_root()
    root.mkdir(parents=True, exist_ok=True)
    return root


def generate_filename(original: str | None) -> str:
    """<epoch millis>-<random suffix><original extension>, unique per upload."""
    ext = Path(original or "").suffix.lower()
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"


def _create_unique(root: Path, original: str | None) -> tuple[str, BinaryIO]:
    """Open a new file under a freshly generated name, never replacing an existing one."""
    for _ in range(NAME_ATTEMPTS):
        filename = generate_filename(original)
        try:
            return filename, (root / filename).open("xb")
        except FileExistsError:
            logger.warning("Upload name %s already taken, generating another", filename)
    raise UploadError("Could not allocate a unique filename for the image")


def has_file(upload: UploadFile | None) -> bool:
    """True when the multipart field carried an actual file."""
    return upload is not None and bool(upload.filename)


def save_image(upload: UploadFile) -> str:
    """Validate and write an uploaded image. Returns the stored filename.

    Rejects non-image MIME types and files larger than ``max_upload_bytes``.
    Nothing is left on disk when the upload is rejected.
    """
    content_type = (upload.content_type or "").lower()
    if not content_type.startswith("image/"):
        logger.info("Rejected upload %r with content type %r", upload.filename, content_type)
        raise UploadError("Only images are allowed!")

    limit = settings.max_upload_bytes
    root = ensure_upload_dir()
    filename, out = _create_unique(root, upload.filename)
    target = root / filename

    written = 0
    try:
        with out as fh:
            while chunk := upload.file.read(CHUNK_SIZE):
                written += len(chunk)
                if written > limit:
                    raise UploadError(
                        f"Image is too large. Max size is {limit // (1024 * 1024)} MB.",
                        too_large=True,
                    )
                fh.write(chunk)
    except UploadError:
        target.unlink(missing_ok=True)
        logger.info("Rejected upload %r: exceeds %s bytes", upload.filename, limit)
        raise
    except OSError as exc:
        target.unlink(missing_ok=True)
        logger.exception("Could not write upload %s", target)
        raise UploadError(f"Could not store image: {exc}") from exc

    logger.info("Stored upload %r as %s (%s bytes)", upload.filename, filename, written)
    return filename


def discard_image(filename: str) -> None:
    """Remove a stored upload, e.g. after the issue insert failed."""
    path = upload_root() / os.path.basename(filename)
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.exception("Could not remove orphaned upload %s", path)
    else:
        logger.info("Removed orphaned upload %s", filename)

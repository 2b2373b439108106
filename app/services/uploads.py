"""Local storage for listing images received as multipart uploads."""

import logging
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import UploadFile

from app.core.errors import ValidationError

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp", ".gif"})
UPLOAD_URL_PREFIX = "/uploads"


def is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


def upload_dir(settings: "Settings") -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


async def save_image(file: UploadFile, settings: "Settings") -> str:
    """
    Validate and store one image; return its public URL path (/uploads/<name>).

    The stored name is random; the client filename only contributes its extension.
    """
    filename = getattr(file, "filename", None) or ""
    ext = Path(filename).suffix.lower()
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise ValidationError(
            "Image must be one of: " + ", ".join(sorted(ALLOWED_IMAGE_EXTENSIONS))
        )
    content = await file.read()
    if not content:
        raise ValidationError(f"Uploaded file '{filename}' is empty.")
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise ValidationError(
            f"Image size must not exceed {settings.MAX_UPLOAD_BYTES // (1024 * 1024)} MB."
        )
    name = f"{uuid.uuid4().hex}{ext}"
    (upload_dir(settings) / name).write_bytes(content)
    logger.info("Stored upload %s (%d bytes)", name, len(content))
    return f"{UPLOAD_URL_PREFIX}/{name}"


def delete_stored_image(url: str | None, settings: "Settings") -> None:
    """Remove a previously stored image; references outside the upload dir are left alone."""
    if not url or not url.startswith(f"{UPLOAD_URL_PREFIX}/"):
        return
    name = url[len(UPLOAD_URL_PREFIX) + 1 :]
    if "/" in name or "\\" in name or name in ("", ".", ".."):
        return
    path = Path(settings.UPLOAD_DIR) / name
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("Stored image already missing: %s", name)

# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Local-disk storage for uploaded images.

Files are written to ``settings.storage_dir / <folder> / <name>`` where the
name is ``<unix-ts>_[<tag>_]<random>.<ext>``; only the name is stored in the
database.  ``main.py`` mounts ``settings.storage_dir`` at ``/storage`` so
:func:`public_url` resolves to a servable URL.
"""

import secrets
import time
from pathlib import Path
from typing import List, Optional

from fastapi import UploadFile

from core.config import settings
from core.errors import ValidationFailedError
from core.logger import logger

IMAGE_EXTENSIONS = {"jpeg", "png", "jpg", "gif", "webp"}
MAX_IMAGE_BYTES = 2 * 1024 * 1024


def storage_root() -> Path:
    root = Path(settings.storage_dir)
    root.mkdir(parents=True, exist_ok=True)
    return root


def _extension(filename: Optional[str]) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


async def read_image(upload: UploadFile, field: str) -> bytes:
    """
    Validate an uploaded image (extension and size) and return its bytes.
    Raises 422 with a field error on failure.
    """
    ext = _extension(upload.filename)
    if ext not in IMAGE_EXTENSIONS:
        raise ValidationFailedError(
            "Validation failed",
            errors={field: ["The file must be of type: jpeg, png, jpg, gif, webp."]},
        )
    data = await upload.read()
    if len(data) > MAX_IMAGE_BYTES:
        raise ValidationFailedError(
            "Validation failed",
            errors={field: ["The file may not be greater than 2048 kilobytes."]},
        )
    return data


def save_file(folder: str, original_name: str, data: bytes, tag: str = "") -> str:
    """Write *data* under *folder* and return the generated file name."""
    ext = _extension(original_name)
    middle = f"{tag}_" if tag else ""
    name = f"{int(time.time())}_{middle}{secrets.token_hex(5)}.{ext}"
    target_dir = storage_root() / folder
    target_dir.mkdir(parents=True, exist_ok=True)
    (target_dir / name).write_bytes(data)
    return name


def delete_file(folder: str, name: Optional[str]) -> None:
    """Remove a stored file.  Missing files are ignored."""
    if not name:
        return
    path = storage_root() / folder / name
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("Stored file already gone: %s/%s", folder, name)


def delete_files(folder: str, names: Optional[List[str]]) -> None:
    for name in names or []:
        delete_file(folder, name)


def public_url(folder: str, name: Optional[str]) -> Optional[str]:
    if not name:
        return None
    return f"{settings.public_base_url.rstrip('/')}/storage/{folder}/{name}"

# storefront/services/file_service.py
"""
Product image storage on the local filesystem.
"""
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
from fastapi import UploadFile
from pydantic import BaseModel

from storefront.core.config import settings
from storefront.core.exceptions import BusinessRuleError, NotFoundError
from storefront.core.logging import log

PUBLIC_PREFIX = "/uploads/products"
CHUNK_SIZE = 64 * 1024


class StoredImage(BaseModel):
    success: bool = True
    image_url: str
    file_name: str
    message: str = "Image uploaded successfully"


def _extension(filename: Optional[str]) -> str:
    return Path(filename or "").suffix.lower()


def validate_image(filename: Optional[str], size: int) -> str:
    """Return the normalized extension or raise BusinessRuleError."""
    if not filename or size == 0:
        raise BusinessRuleError("No file was provided")

    extension = _extension(filename)
    allowed = settings.uploads.allowed_extensions
    if extension not in allowed:
        raise BusinessRuleError(f"File type not allowed. Allowed types: {', '.join(allowed)}")

    if size > settings.uploads.max_file_size:
        raise _too_large()
    return extension


def _too_large() -> BusinessRuleError:
    limit_mb = settings.uploads.max_file_size // (1024 * 1024)
    return BusinessRuleError(f"File is too large. Maximum size is {limit_mb}MB")


async def read_upload(upload: UploadFile) -> bytes:
    """Read an upload in chunks, stopping as soon as it passes the size limit."""
    limit = settings.uploads.max_file_size
    if upload.size is not None and upload.size > limit:
        raise _too_large()

    chunks = []
    total = 0
    while True:
        chunk = await upload.read(CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise _too_large()
        chunks.append(chunk)
    return b"".join(chunks)


async def save_product_image(filename: Optional[str], content: bytes) -> StoredImage:
    extension = validate_image(filename, len(content))

    directory = settings.uploads.products_dir
    directory.mkdir(parents=True, exist_ok=True)
    stored_name = f"{uuid.uuid4()}{extension}"

    async with aiofiles.open(directory / stored_name, "wb") as f:
        await f.write(content)

    log("UPLOAD", f"Stored {filename} as {stored_name} ({len(content)} bytes)")
    return StoredImage(image_url=f"{PUBLIC_PREFIX}/{stored_name}", file_name=stored_name)


def _resolve_inside(directory: Path, file_name: str) -> Path:
    base = directory.resolve()
    target = (base / file_name).resolve()
    if target.parent != base:
        raise BusinessRuleError("Invalid file name")
    return target


async def delete_product_image(file_name: str) -> None:
    if not file_name or "/" in file_name or "\\" in file_name:
        raise BusinessRuleError("Invalid file name")

    target = _resolve_inside(settings.uploads.products_dir, file_name)
    if not target.is_file():
        raise NotFoundError("File")

    target.unlink()
    log("UPLOAD", f"Deleted {file_name}")

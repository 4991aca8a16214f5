from __future__ import annotations

import mimetypes
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from .exceptions import ValidationError, ValidationIssue

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"})
MAX_IMAGE_BYTES = 5 * 1024 * 1024
PUBLIC_OBJECT_PREFIX = "/object/public/"
OBJECT_PREFIX = "/object/"


@dataclass(frozen=True)
class ImageFile:
    filename: str
    content: bytes
    content_type: str

    @classmethod
    def from_path(cls, path: str | Path) -> ImageFile:
        file_path = Path(path)
        content_type, _ = mimetypes.guess_type(file_path.name)
        return cls(
            filename=file_path.name,
            content=file_path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        suffix = Path(self.filename).suffix.lstrip(".").lower()
        if suffix:
            return suffix
        return self.content_type.split("/")[-1] or "bin"


def validate_image(image: ImageFile) -> None:
    content_type = (image.content_type or "").strip().lower()
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(
            [
                ValidationIssue(
                    field="image",
                    reason="Invalid file type. Please upload a JPEG, PNG, GIF, or WebP image.",
                )
            ]
        )
    if image.size > MAX_IMAGE_BYTES:
        raise ValidationError(
            [ValidationIssue(field="image", reason="File size too large. Maximum size is 5MB.")]
        )
    if image.size == 0:
        raise ValidationError([ValidationIssue(field="image", reason="File is empty.")])


def build_object_path(folder: str, image: ImageFile, *, now_ms: int | None = None, token: str | None = None) -> str:
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = token or secrets.token_hex(4)
    name = f"{stamp}-{suffix}.{image.extension}"
    clean_folder = folder.strip("/")
    return f"{clean_folder}/{name}" if clean_folder else name


def object_path_from_url(url: str) -> str:
    """Storage object path (``bucket/folder/file``) for a public or raw object URL."""
    path = urlparse(url).path if safe_image_url(url) else url
    for prefix in (PUBLIC_OBJECT_PREFIX, OBJECT_PREFIX):
        marker = path.find(prefix)
        if marker >= 0:
            return path[marker + len(prefix):].lstrip("/")
    return path.lstrip("/")


def safe_image_url(value: str | None) -> str | None:
    if not value:
        return None
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"}:
        return None
    if not parsed.netloc:
        return None
    return value

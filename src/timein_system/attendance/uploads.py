from __future__ import annotations

import io
import logging
import time
import uuid
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError
from werkzeug.datastructures import FileStorage

from ..common.csv_utils import sanitize_filename_part
from ..core.constants import DEFAULT_MAX_IMAGE_BYTES
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageFormat:
    name: str
    mime_type: str
    extensions: tuple[str, ...]
    pillow_format: str

    def matches_magic(self, data: bytes) -> bool:
        if self.name == "jpeg":
            return data[:3] == b"\xff\xd8\xff"
        if self.name == "png":
            return data[:4] == b"\x89PNG"
        if self.name == "webp":
            return data[:4] == b"RIFF" and data[8:12] == b"WEBP"
        return False


IMAGE_FORMATS = (
    ImageFormat("jpeg", "image/jpeg", (".jpg", ".jpeg"), "JPEG"),
    ImageFormat("png", "image/png", (".png",), "PNG"),
    ImageFormat("webp", "image/webp", (".webp",), "WEBP"),
)
ALLOWED_MIME_TYPES = tuple(f.mime_type for f in IMAGE_FORMATS)
ALLOWED_EXTENSIONS = tuple(ext for f in IMAGE_FORMATS for ext in f.extensions)


@dataclass(frozen=True)
class ValidatedImage:
    data: bytes
    extension: str
    image_format: ImageFormat


def sanitize_extension(filename: str) -> str:
    suffix = Path(filename or "").suffix.lower()
    return "".join(ch for ch in suffix if ch == "." or "a" <= ch <= "z")


class ImageUploadStore:
    """Validates uploaded screenshots and writes them to the uploads folder."""

    def __init__(self, uploads_dir: str | Path, *, max_bytes: int = DEFAULT_MAX_IMAGE_BYTES):
        self._uploads_dir = Path(uploads_dir)
        self._max_bytes = int(max_bytes)

    @property
    def uploads_dir(self) -> Path:
        return self._uploads_dir

    def validate(self, upload: FileStorage) -> ValidatedImage:
        mime_type = (upload.mimetype or "").lower()
        declared = next((f for f in IMAGE_FORMATS if f.mime_type == mime_type), None)
        if declared is None:
            raise ValidationError("Invalid image type")

        data = upload.read(self._max_bytes + 1)
        if len(data) > self._max_bytes:
            raise ValidationError("Image too large")

        ext = sanitize_extension(upload.filename or "")
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError("Invalid file extension")
        if ext not in declared.extensions or not declared.matches_magic(data):
            raise ValidationError("Invalid image content")

        try:
            with Image.open(io.BytesIO(data)) as img:
                detected = img.format
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as exc:
            logger.info("Rejected upload that Pillow could not decode: %s", exc)
            raise ValidationError("Invalid image content") from exc
        if detected != declared.pillow_format:
            raise ValidationError("Invalid image content")

        return ValidatedImage(data=data, extension=ext, image_format=declared)

    def save(self, image: ValidatedImage, *, owner_email: str) -> Path:
        self._uploads_dir.mkdir(parents=True, exist_ok=True)
        filename = f"{int(time.time() * 1000)}-{sanitize_filename_part(owner_email)}-{uuid.uuid4()}{image.extension}"
        path = self._uploads_dir / Path(filename).name
        path.write_bytes(image.data)
        return path


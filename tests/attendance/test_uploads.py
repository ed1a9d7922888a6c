from __future__ import annotations

import io

import pytest
from werkzeug.datastructures import FileStorage

from timein_system.attendance.uploads import ImageUploadStore, sanitize_extension
from timein_system.core.exceptions import ValidationError


def upload(data: bytes, filename: str, content_type: str) -> FileStorage:
    return FileStorage(stream=io.BytesIO(data), filename=filename, content_type=content_type)


@pytest.fixture
def store(tmp_path):
    return ImageUploadStore(tmp_path / "uploads", max_bytes=64 * 1024)


def test_png_and_jpeg_are_accepted(store, png_bytes, jpeg_bytes):
    png = store.validate(upload(png_bytes, "screen.png", "image/png"))
    jpeg = store.validate(upload(jpeg_bytes, "screen.JPG", "image/jpeg"))

    assert png.extension == ".png"
    assert jpeg.extension == ".jpg"
    assert jpeg.image_format.name == "jpeg"


def test_unknown_mime_type_is_rejected(store, png_bytes):
    with pytest.raises(ValidationError, match="Invalid image type"):
        store.validate(upload(png_bytes, "screen.png", "application/pdf"))


def test_oversized_image_is_rejected(tmp_path, png_bytes):
    small = ImageUploadStore(tmp_path / "uploads", max_bytes=len(png_bytes) - 1)

    with pytest.raises(ValidationError, match="Image too large"):
        small.validate(upload(png_bytes, "screen.png", "image/png"))


def test_disallowed_extension_is_rejected(store, png_bytes):
    with pytest.raises(ValidationError, match="Invalid file extension"):
        store.validate(upload(png_bytes, "screen.exe", "image/png"))


def test_extension_must_match_declared_type(store, png_bytes):
    with pytest.raises(ValidationError, match="Invalid image content"):
        store.validate(upload(png_bytes, "screen.jpg", "image/png"))


def test_content_must_match_declared_type(store, jpeg_bytes):
    with pytest.raises(ValidationError, match="Invalid image content"):
        store.validate(upload(jpeg_bytes, "screen.png", "image/png"))


def test_truncated_image_is_rejected(store):
    fake = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

    with pytest.raises(ValidationError, match="Invalid image content"):
        store.validate(upload(fake, "screen.png", "image/png"))


def test_save_names_file_after_owner(store, png_bytes):
    image = store.validate(upload(png_bytes, "screen.png", "image/png"))

    path = store.save(image, owner_email="ana cruz@example.com")

    assert path.parent == store.uploads_dir
    assert path.suffix == ".png"
    assert "-ana_cruz@example.com-" in path.name
    assert path.read_bytes() == png_bytes


def test_sanitize_extension_drops_odd_characters():
    assert sanitize_extension("shot.P%NG") == ".png"
    assert sanitize_extension("noext") == ""

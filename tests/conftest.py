from __future__ import annotations

import io
from datetime import datetime

import pytest
from PIL import Image

from timein_system import create_app


def make_image(fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), "red").save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def fixed_now():
    return datetime(2026, 2, 2, 8, 45, 0)


@pytest.fixture
def png_bytes():
    return make_image("PNG")


@pytest.fixture
def jpeg_bytes():
    return make_image("JPEG")


@pytest.fixture
def app(tmp_path):
    app = create_app(
        "timein_system.config.testing",
        DATA_DIR=str(tmp_path / "data"),
        UPLOADS_DIR=str(tmp_path / "uploads"),
    )
    yield app
    app.extensions["timein"].email_queue.shutdown()


@pytest.fixture
def container(app):
    return app.extensions["timein"]


@pytest.fixture
def client(app):
    return app.test_client()

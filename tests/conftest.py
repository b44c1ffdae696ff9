from __future__ import annotations

import io
from datetime import datetime

import pytest
from PIL import Image


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 10, 8, 25, 0)


@pytest.fixture
def jpeg_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (32, 32), (200, 30, 30)).save(buf, format="JPEG")
    return buf.getvalue()

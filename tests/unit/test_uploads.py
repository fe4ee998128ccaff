"""Tests for avatarstudio.api.uploads — upload acceptance and storage.

Tests cover:
- The conjunctive extension/content-type check.
- The size limit.
- Collision-resistant storage names.
"""

from __future__ import annotations

import asyncio
import io
import re

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from avatarstudio.api import uploads
from avatarstudio.api.uploads import (
    accept_upload,
    is_allowed_media,
    store_upload,
    unique_upload_name,
)
from avatarstudio.core.errors import UnsupportedMediaError, UploadTooLargeError


def _upload(data: bytes, filename: str = "photo.png", content_type: str = "image/png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class TestIsAllowedMedia:
    @pytest.mark.parametrize(
        "filename,content_type",
        [
            ("a.jpg", "image/jpeg"),
            ("a.jpeg", "image/jpeg"),
            ("a.png", "image/png"),
            ("a.JPG", "image/jpeg"),
            ("a.jpg", "image/jpg"),
        ],
    )
    def test_allowed(self, filename, content_type):
        assert is_allowed_media(filename, content_type)

    @pytest.mark.parametrize(
        "filename,content_type",
        [
            ("a.gif", "image/gif"),
            ("a.gif", "image/png"),  # bad extension, good type
            ("a.png", "image/gif"),  # good extension, bad type
            ("a.png", None),
            ("noextension", "image/png"),
            ("", "image/png"),
        ],
    )
    def test_rejected(self, filename, content_type):
        """Both the extension and the content type must be allowed."""
        assert not is_allowed_media(filename, content_type)


class TestAcceptUpload:
    def test_returns_bytes(self, png_bytes):
        data = asyncio.run(accept_upload(_upload(png_bytes), max_bytes=1024 * 1024))
        assert data == png_bytes

    def test_rejects_unsupported_type(self, png_bytes):
        with pytest.raises(UnsupportedMediaError):
            asyncio.run(accept_upload(_upload(png_bytes, filename="a.bmp"), max_bytes=1024 * 1024))

    def test_rejects_oversized(self):
        with pytest.raises(UploadTooLargeError):
            asyncio.run(accept_upload(_upload(b"x" * 11), max_bytes=10))

    def test_accepts_at_limit(self):
        assert asyncio.run(accept_upload(_upload(b"x" * 10), max_bytes=10)) == b"x" * 10


class TestStorage:
    def test_name_format(self):
        """Names are field-millis-random plus the original extension."""
        name = unique_upload_name("holiday.JPEG")
        assert re.fullmatch(r"image-\d{13}-\d+\.JPEG", name)

    def test_timestamps_strictly_increase(self):
        stamps = [uploads._next_timestamp_ms() for _ in range(100)]
        assert all(b > a for a, b in zip(stamps, stamps[1:]))

    def test_names_never_collide(self):
        names = {unique_upload_name("a.png") for _ in range(1000)}
        assert len(names) == 1000

    def test_store_upload_writes_bytes(self, temp_dir, png_bytes):
        path = store_upload(png_bytes, temp_dir, "me.png")
        assert path.parent == temp_dir
        assert path.suffix == ".png"
        assert path.read_bytes() == png_bytes

    def test_store_upload_creates_directory(self, temp_dir):
        target = temp_dir / "missing"
        path = store_upload(b"data", target, "me.jpg")
        assert path.exists()

    def test_store_upload_distinct_files(self, temp_dir):
        paths = {store_upload(b"data", temp_dir, "me.png") for _ in range(20)}
        assert len(paths) == 20
        assert len(list(temp_dir.iterdir())) == 20

    def test_concurrent_accept_and_store_never_collide(self, temp_dir, png_bytes):
        """Uploads accepted and stored concurrently on one event loop get distinct files."""

        async def accept_and_store(i: int):
            data = await accept_upload(_upload(png_bytes, filename=f"p{i}.png"), max_bytes=1024 * 1024)
            return store_upload(data, temp_dir, f"p{i}.png")

        async def run_all():
            return await asyncio.gather(*(accept_and_store(i) for i in range(50)))

        paths = asyncio.run(run_all())
        assert len(set(paths)) == 50
        assert len(list(temp_dir.iterdir())) == 50

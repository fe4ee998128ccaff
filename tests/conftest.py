"""Shared pytest fixtures for Avatar Studio tests."""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from avatarstudio.api.main import create_app
from avatarstudio.core.config import AvatarStudioConfig


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> AvatarStudioConfig:
    """Create a test configuration with temporary directories and no delay.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        AvatarStudioConfig instance for testing
    """
    return AvatarStudioConfig(
        _env_file=None,
        uploads_dir=temp_dir / "uploads",
        generated_dir=temp_dir / "generated",
        resolution_delay_seconds=0.0,
    )


@pytest.fixture
def test_client(test_config: AvatarStudioConfig) -> TestClient:
    """Create a TestClient for an app built from the test configuration.

    Args:
        test_config: Configuration from fixture

    Returns:
        TestClient wrapping a fresh application
    """
    return TestClient(create_app(test_config))


def _encode_image(fmt: str) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (64, 64), color=(200, 120, 40)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """A small valid PNG image."""
    return _encode_image("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    """A small valid JPEG image."""
    return _encode_image("JPEG")

"""Test configuration and fixtures for cl_image_resizer.

This module provides:
- Pytest configuration (markers, dependency checks)
- Function-scoped fixtures (generated source images, image directory)
- Integration fixtures (FastAPI TestClient over a real dispatcher)
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import features

from cl_image_resizer.common.schemas import EncodeConfig, ServerConfig
from cl_image_resizer.server import create_app
from tests.utils.media import make_image

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "requires_avif: requires Pillow built with AVIF support",
    )


def pytest_runtest_setup(item):
    """Check dependencies before running tests - FAIL if missing (not skip)."""
    if item.get_closest_marker("requires_avif") and not features.check("avif"):
        pytest.fail(
            "Pillow was built without AVIF support. "
            "Install a Pillow wheel >= 11.3 (bundles libavif)\n"
            "Or exclude with: pytest -m 'not requires_avif'",
            pytrace=False,
        )


# ============================================================================
# Function-Scoped Fixtures (Run Per Test)
# ============================================================================


@pytest.fixture
def images_dir(tmp_path: Path) -> Path:
    """Provide an image directory holding a JPEG and a PNG."""
    directory = tmp_path / "images"
    directory.mkdir()
    _ = make_image(directory / "photo.jpg", 800, 600)
    _ = make_image(directory / "banner.png", 200, 100, mode="RGBA")
    _ = make_image(directory / "tall.png", 4, 2000)
    _ = (directory / "broken.jpg").write_bytes(b"this is not an image")
    return directory


@pytest.fixture
def large_jpeg(tmp_path: Path) -> Path:
    """4000x3000 JPEG source."""
    return make_image(tmp_path / "large.jpg", 4000, 3000)


@pytest.fixture
def small_png(tmp_path: Path) -> Path:
    """200x100 PNG source."""
    return make_image(tmp_path / "small.png", 200, 100)


@pytest.fixture
def encode_config() -> EncodeConfig:
    """Fast encoder settings for tests."""
    return EncodeConfig(quality=80, speed=10)


@pytest.fixture
def api_client(images_dir: Path, encode_config: EncodeConfig) -> Iterator[TestClient]:
    """Provide FastAPI TestClient for route testing."""
    app = create_app(
        ServerConfig(images_dir=images_dir, concurrency_limit=4, workers=2),
        encode_config,
    )
    with TestClient(app) as client:
        yield client

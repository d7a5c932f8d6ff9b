"""
Test configuration and fixtures for Palette Studio tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from palette_studio.api.v1 import get_palette_store
from palette_studio.main import app
from palette_studio.services.colors.sampling import PixelBuffer
from palette_studio.services.palettes import PaletteStore

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
YELLOW = (255, 255, 0)


@pytest.fixture
def palette_store(tmp_path):
    """Palette store backed by a temporary file."""
    return PaletteStore(tmp_path / "palettes.json")


@pytest.fixture
def test_client(palette_store):
    """Create test client for the FastAPI app with an isolated palette store."""
    app.dependency_overrides[get_palette_store] = lambda: palette_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from palette_studio.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def make_buffer():
    """Build a PixelBuffer from a list of RGBA tuples laid out as width x height."""
    def _make(pixels, width=None, height=1):
        width = width if width is not None else len(pixels) // height
        data = np.array(pixels, dtype=np.uint8).reshape(-1)
        return PixelBuffer(width=width, height=height, data=data)
    return _make


@pytest.fixture
def quadrant_rgba():
    """20x20 RGBA array: red top-left, green top-right, blue bottom-left, yellow bottom-right."""
    img = np.zeros((20, 20, 4), dtype=np.uint8)
    img[:, :, 3] = 255
    img[:10, :10, :3] = RED
    img[:10, 10:, :3] = GREEN
    img[10:, :10, :3] = BLUE
    img[10:, 10:, :3] = YELLOW
    return img


@pytest.fixture
def encode_png():
    """Encode an RGB or RGBA array as PNG bytes."""
    def _encode(array):
        out = io.BytesIO()
        Image.fromarray(array).save(out, format="PNG")
        return out.getvalue()
    return _encode

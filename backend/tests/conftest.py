"""
Test configuration and fixtures for GamePalette tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Import the main app
from main import app


def solid_image(width, height, rgba):
    """RGBA PIL image filled with one color."""
    return Image.new("RGBA", (width, height), tuple(rgba))


def encode_png(image):
    """Encode a PIL image or RGBA array to PNG bytes."""
    if isinstance(image, np.ndarray):
        image = Image.fromarray(image.astype(np.uint8))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from app.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def red_image():
    """10x10 opaque pure red."""
    return solid_image(10, 10, (255, 0, 0, 255))


@pytest.fixture
def transparent_image():
    """32x32 fully transparent."""
    return solid_image(32, 32, (0, 0, 0, 0))


@pytest.fixture
def red_png(red_image):
    return encode_png(red_image)


@pytest.fixture
def noise_image():
    """Deterministic random RGB noise, 64x48."""
    rng = np.random.default_rng(1234)
    pixels = rng.integers(0, 256, size=(48, 64, 3), dtype=np.uint8)
    return Image.fromarray(pixels)


@pytest.fixture
def split_image():
    """40x20 image: left half red, right half blue."""
    arr = np.zeros((20, 40, 4), dtype=np.uint8)
    arr[:, :20] = (255, 0, 0, 255)
    arr[:, 20:] = (0, 0, 255, 255)
    return arr


@pytest.fixture
def transparent_png(transparent_image):
    return encode_png(transparent_image)


@pytest.fixture
def split_png(split_image):
    return encode_png(split_image)

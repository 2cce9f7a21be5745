import io

import numpy as np
import pytest
from PIL import Image


def gradient_array(width=100, height=100):
    x = np.arange(width)[None, :].repeat(height, axis=0)
    y = np.arange(height)[:, None].repeat(width, axis=1)
    r = x * 255 // width
    g = y * 255 // height
    b = (x + y) * 255 // (width + height)
    return np.stack([r, g, b], axis=-1).astype(np.float64)


def block_noise_array(seed, width=100, height=100, block=10):
    rng = np.random.default_rng(seed)
    cells = rng.integers(0, 256, size=(height // block, width // block, 3))
    return np.kron(cells, np.ones((block, block, 1))).astype(np.float64)


def to_image(arr):
    return Image.fromarray(np.clip(np.rint(arr), 0, 255).astype(np.uint8))


def stripes(vertical, size=100, width=10):
    line = (np.arange(size) // width % 2 * 255).astype(np.uint8)
    arr = np.tile(line, (size, 1))
    if not vertical:
        arr = arr.T
    return Image.fromarray(np.stack([arr] * 3, axis=-1))


@pytest.fixture
def textured():
    """100x100 gradient with blocky texture."""
    return to_image(0.5 * gradient_array() + 0.5 * block_noise_array(0))


@pytest.fixture
def textured_perturbed():
    arr = 0.5 * gradient_array() + 0.5 * block_noise_array(0)
    arr = np.clip(np.rint(arr), 0, 255)
    arr[40:42, 60:62] = np.clip(arr[40:42, 60:62] + 12, 0, 255)
    return to_image(arr)


@pytest.fixture
def vertical_stripes():
    return stripes(vertical=True)


@pytest.fixture
def horizontal_stripes():
    return stripes(vertical=False)


@pytest.fixture
def noise_pair():
    return to_image(block_noise_array(1)), to_image(block_noise_array(2))


@pytest.fixture
def png_bytes(textured):
    buf = io.BytesIO()
    textured.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def gradient():
    """Plain 100x100 gradient."""
    return to_image(gradient_array())


@pytest.fixture
def gradient_perturbed():
    arr = np.clip(np.rint(gradient_array()), 0, 255)
    arr[40:42, 60:62] = np.clip(arr[40:42, 60:62] + 12, 0, 255)
    return to_image(arr)


@pytest.fixture
def palette_image():
    """1024x1024 palette-mode image, large enough to be downscaled."""
    return to_image(block_noise_array(3, width=1024, height=1024, block=32)).convert("P")

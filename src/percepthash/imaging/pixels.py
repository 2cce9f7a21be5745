from __future__ import annotations

from typing import Tuple

import numpy as np
from PIL import Image

from ..errors import EmptySampleError


def gray_samples(im: Image.Image) -> np.ndarray:
    """Return intensities as a (height, width) float array, row-major.

    Non-"L" images are reduced to luma first.
    """
    if im.mode != "L":
        im = im.convert("L")
    return np.asarray(im, dtype=np.float64)


def channel_samples(im: Image.Image) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return flat (r, g, b) sample arrays in row-major order."""
    if im.mode != "RGB":
        im = im.convert("RGB")
    arr = np.asarray(im, dtype=np.float64)
    return arr[:, :, 0].ravel(), arr[:, :, 1].ravel(), arr[:, :, 2].ravel()


def mean(values: np.ndarray) -> float:
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        raise EmptySampleError("Cannot compute mean of empty samples")
    return float(values.mean())


def median(values: np.ndarray) -> float:
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        raise EmptySampleError("Cannot compute median of empty samples")
    return float(np.median(values))

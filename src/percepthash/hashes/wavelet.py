from __future__ import annotations

import logging

import numpy as np

from ..config import check_hash_size, check_power_of_two, check_wavelet_mode
from ..hash_value import ImageHash
from ..imaging.pixels import gray_samples, median
from ..imaging.preprocess import ImageSource, load_image, prepare

logger = logging.getLogger(__name__)


def _haar_step(block: np.ndarray, axis: int) -> np.ndarray:
    # Averages go to the first half, half-differences to the second
    even = block[:, 0::2] if axis == 1 else block[0::2, :]
    odd = block[:, 1::2] if axis == 1 else block[1::2, :]
    return np.concatenate([(even + odd) / 2.0, (even - odd) / 2.0], axis=axis)


def haar_decompose(pixels: np.ndarray, target: int) -> np.ndarray:
    """Repeated 2D Haar decomposition of a square array down to ``target``.

    Each level transforms rows then columns of the current top-left working
    region, then halves it. The side must be ``target`` times a power of two.
    """
    coeffs = np.array(pixels, dtype=np.float64)
    size = coeffs.shape[0]
    if coeffs.ndim != 2 or coeffs.shape[1] != size:
        raise ValueError(f"haar_decompose expects a square array, got shape {coeffs.shape}")
    if size % target or (size // target) & (size // target - 1):
        raise ValueError(f"Cannot decompose size {size} down to {target}")

    while size > target:
        region = coeffs[:size, :size]
        region = _haar_step(region, axis=1)
        region = _haar_step(region, axis=0)
        coeffs[:size, :size] = region
        size //= 2
    return coeffs


def wavelet_hash(image: ImageSource, hash_size: int = 8, mode: str = "haar", scale: int = 4) -> ImageHash:
    """Wavelet hash (wHash) using a Haar decomposition.

    The low-frequency quadrant left after decomposing a
    (hash_size * scale) grid down to hash_size holds the mean of each
    scale x scale block; those values are thresholded against their median.
    """
    check_hash_size(hash_size)
    check_wavelet_mode(mode)
    check_power_of_two("scale", scale)
    img_size = hash_size * scale

    im = prepare(load_image(image), img_size, img_size)
    coeffs = haar_decompose(gray_samples(im), hash_size)
    low = coeffs[:hash_size, :hash_size]

    bits = low >= median(low)
    h = ImageHash.from_array(bits)
    logger.debug("whash(size=%d, scale=%d) = %s", hash_size, scale, h)
    return h

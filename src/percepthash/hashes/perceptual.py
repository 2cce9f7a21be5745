from __future__ import annotations

import logging
from functools import lru_cache

import numpy as np

from ..config import check_hash_size, check_positive
from ..hash_value import ImageHash
from ..imaging.pixels import gray_samples, median
from ..imaging.preprocess import ImageSource, load_image, prepare

logger = logging.getLogger(__name__)


@lru_cache(maxsize=32)
def _cosine_basis(n: int) -> np.ndarray:
    """basis[k, i] = cos((2i + 1) k pi / 2n), read-only."""
    k = np.arange(n, dtype=np.float64)
    basis = np.cos(np.outer(k, 2 * k + 1) * np.pi / (2 * n))
    basis.setflags(write=False)
    return basis


def _alpha(n: int) -> np.ndarray:
    a = np.ones(n, dtype=np.float64)
    a[0] = 1.0 / np.sqrt(2.0)
    return a


def dct2(pixels: np.ndarray) -> np.ndarray:
    """2D DCT-II of a (height, width) array, indexed as D[v, u].

    D[v, u] = a(u) a(v) / 4 * sum_x sum_y p[y, x] cos((2x+1)u pi/2W) cos((2y+1)v pi/2H)
    with a(0) = 1/sqrt(2) and a(k > 0) = 1. Computed separably.
    """
    pixels = np.asarray(pixels, dtype=np.float64)
    if pixels.ndim != 2:
        raise ValueError(f"dct2 expects a 2D array, got shape {pixels.shape}")
    h, w = pixels.shape
    coeffs = _cosine_basis(h) @ pixels @ _cosine_basis(w).T
    return np.outer(_alpha(h), _alpha(w)) * coeffs / 4.0


def perceptual_hash(image: ImageSource, hash_size: int = 8, highfreq_factor: int = 4) -> ImageHash:
    """Perceptual hash (pHash).

    The image is reduced to a (hash_size * highfreq_factor) square grayscale
    grid, transformed with a 2D DCT and the top-left hash_size block of
    coefficients is thresholded against its median. The DC coefficient is
    left out of the median and its bit is always 0, so overall brightness
    does not take part in the hash.
    """
    check_hash_size(hash_size)
    check_positive("highfreq_factor", highfreq_factor)
    img_size = hash_size * highfreq_factor

    im = prepare(load_image(image), img_size, img_size)
    low = dct2(gray_samples(im))[:hash_size, :hash_size].ravel()

    med = median(low[1:])
    bits = low > med
    bits[0] = False

    h = ImageHash.from_array(bits)
    logger.debug("phash(size=%d, factor=%d) = %s", hash_size, highfreq_factor, h)
    return h

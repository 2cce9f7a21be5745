from __future__ import annotations

import logging
from typing import List, Tuple

import numpy as np
from PIL import Image

from ..config import check_hash_size, check_positive, check_window
from ..errors import ConfigError
from ..hash_value import ImageHash
from ..imaging.edges import sobel_magnitude
from ..imaging.pixels import gray_samples
from ..imaging.preprocess import ImageSource, crop, load_image, prepare
from .perceptual import perceptual_hash

logger = logging.getLogger(__name__)

Anchor = Tuple[int, int, float]  # (x, y, energy)


def crop_resistant_hash(
    image: ImageSource,
    hash_size: int = 8,
    grid_size: int = 2,
    highfreq_factor: int = 4,
) -> ImageHash:
    """Concatenated pHash of each cell of a grid_size x grid_size grid.

    Cells are taken in row-major order. Pixels left over by the integer
    division of the image size are dropped.
    """
    check_hash_size(hash_size)
    check_positive("grid_size", grid_size)
    im = load_image(image)

    width, height = im.size
    cell_w, cell_h = width // grid_size, height // grid_size
    if cell_w < 1 or cell_h < 1:
        raise ConfigError(f"Image {width}x{height} is too small for a {grid_size}x{grid_size} grid")
    if width % grid_size or height % grid_size:
        logger.warning(
            "Dropping %d remainder column(s) and %d row(s) for %dx%d grid",
            width % grid_size,
            height % grid_size,
            grid_size,
            grid_size,
        )

    parts: List[np.ndarray] = []
    for gy in range(grid_size):
        for gx in range(grid_size):
            cell = crop(im, gx * cell_w, gy * cell_h, cell_w, cell_h)
            h = perceptual_hash(cell, hash_size=hash_size, highfreq_factor=highfreq_factor)
            parts.append(h.to_array())

    h = ImageHash.from_array(np.concatenate(parts))
    logger.debug("crop_resistant(size=%d, grid=%d) = %s", hash_size, grid_size, h)
    return h


def find_anchors(edges: np.ndarray, count: int, window: int = 16) -> List[Anchor]:
    """Return the ``count`` highest-energy window centres of an edge map.

    Centres lie on a grid with step ``window`` and the windows they span do
    not overlap. Ties keep scan order (row-major).
    """
    check_window(window)
    height, width = edges.shape
    half = window // 2
    anchors: List[Anchor] = []
    for y in range(window, height - window, window):
        for x in range(window, width - window, window):
            energy = float(edges[y - half : y + half, x - half : x + half].sum())
            anchors.append((x, y, energy))

    order = np.argsort(-np.array([a[2] for a in anchors]), kind="stable")
    return [anchors[i] for i in order[:count]]


def crop_resistant_segmented_hash(
    image: ImageSource,
    hash_size: int = 8,
    segments: int = 4,
    window: int = 16,
    work_width: int = 512,
    highfreq_factor: int = 4,
) -> ImageHash:
    """Best-effort crop-resistant hash anchored on high-edge-energy regions.

    This is a heuristic and not a keypoint detector. The result always has
    ``segments * hash_size**2`` bits but similar images are not guaranteed
    to pick the same anchors.
    """
    check_hash_size(hash_size)
    check_positive("segments", segments)
    check_window(window)
    check_positive("work_width", work_width)
    im = load_image(image)

    width, height = im.size
    work_height = max(1, round(work_width * height / width))
    gray: Image.Image = prepare(im, work_width, work_height)
    edges = sobel_magnitude(gray_samples(gray))

    anchors = find_anchors(edges, segments, window)
    if len(anchors) < segments:
        raise ConfigError(
            f"Only {len(anchors)} candidate window(s) in a {work_width}x{work_height} image, "
            f"{segments} segments requested"
        )

    seg = min(work_width, work_height) // 4
    parts: List[np.ndarray] = []
    for x, y, energy in anchors:
        # Clamp so the segment stays inside the image
        sx = min(max(x - seg // 2, 0), work_width - seg)
        sy = min(max(y - seg // 2, 0), work_height - seg)
        logger.debug("segment at (%d, %d) size %d, energy %.0f", sx, sy, seg, energy)
        segment = crop(gray, sx, sy, seg, seg)
        parts.append(perceptual_hash(segment, hash_size=hash_size, highfreq_factor=highfreq_factor).to_array())

    h = ImageHash.from_array(np.concatenate(parts))
    logger.debug("crop_resistant_segmented(size=%d, segments=%d) = %s", hash_size, segments, h)
    return h

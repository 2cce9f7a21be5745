from __future__ import annotations

import logging

import numpy as np

from ..config import check_hash_size
from ..hash_value import ImageHash
from ..imaging.pixels import channel_samples, median
from ..imaging.preprocess import ImageSource, load_image, prepare

logger = logging.getLogger(__name__)


def color_hash(image: ImageSource, hash_size: int = 8) -> ImageHash:
    """Per-channel median hash: hash_size**2 bits for each of R, G, B (in that order)."""
    check_hash_size(hash_size)
    im = prepare(load_image(image), hash_size, hash_size, grayscale=False)

    bits = np.concatenate([ch >= median(ch) for ch in channel_samples(im)])
    h = ImageHash.from_array(bits)
    logger.debug("colorhash(size=%d) = %s", hash_size, h)
    return h

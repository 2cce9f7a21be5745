from __future__ import annotations

import logging

from ..config import check_hash_size
from ..hash_value import ImageHash
from ..imaging.pixels import gray_samples, mean
from ..imaging.preprocess import ImageSource, load_image, prepare

logger = logging.getLogger(__name__)


def average_hash(image: ImageSource, hash_size: int = 8) -> ImageHash:
    """Average hash (aHash).

    Steps:
      1) Convert to grayscale
      2) Resize to (hash_size, hash_size)
      3) Set each bit where the pixel is >= the mean of all pixels
    """
    check_hash_size(hash_size)
    im = prepare(load_image(image), hash_size, hash_size)
    arr = gray_samples(im)

    bits = arr >= mean(arr)
    h = ImageHash.from_array(bits)
    logger.debug("ahash(size=%d) = %s", hash_size, h)
    return h

from __future__ import annotations

import logging

from ..config import check_hash_size
from ..hash_value import ImageHash
from ..imaging.pixels import gray_samples
from ..imaging.preprocess import ImageSource, load_image, prepare

logger = logging.getLogger(__name__)


def difference_hash(image: ImageSource, hash_size: int = 8, horizontal: bool = True) -> ImageHash:
    """Compute difference-hash (dHash).

    Steps:
      1) Convert to grayscale
      2) Resize to (hash_size+1, hash_size), or (hash_size, hash_size+1) when vertical
      3) Compare adjacent pixels: a bit is set where brightness increases
         to the right (or downward)
    """
    check_hash_size(hash_size)
    im = load_image(image)
    if horizontal:
        arr = gray_samples(prepare(im, hash_size + 1, hash_size))
        diff = arr[:, 1:] > arr[:, :-1]
    else:
        arr = gray_samples(prepare(im, hash_size, hash_size + 1))
        diff = arr[1:, :] > arr[:-1, :]

    h = ImageHash.from_array(diff)
    logger.debug("dhash(size=%d, horizontal=%s) = %s", hash_size, horizontal, h)
    return h


def horizontal_difference_hash(image: ImageSource, hash_size: int = 8) -> ImageHash:
    return difference_hash(image, hash_size=hash_size, horizontal=True)


def vertical_difference_hash(image: ImageSource, hash_size: int = 8) -> ImageHash:
    return difference_hash(image, hash_size=hash_size, horizontal=False)

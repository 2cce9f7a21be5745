from __future__ import annotations

import math
from typing import Callable, Dict

from ..config import check_hash_size, check_positive
from ..errors import ConfigError, HashFormatError
from ..hash_value import ImageHash
from .average import average_hash
from .color import color_hash
from .crop_resistant import crop_resistant_hash, crop_resistant_segmented_hash
from .difference import horizontal_difference_hash, vertical_difference_hash
from .perceptual import perceptual_hash
from .wavelet import wavelet_hash

HashFunc = Callable[..., ImageHash]

METHODS: Dict[str, HashFunc] = {
    "ahash": average_hash,
    "dhash": horizontal_difference_hash,
    "dhash_vertical": vertical_difference_hash,
    "phash": perceptual_hash,
    "whash": wavelet_hash,
    "colorhash": color_hash,
    "crop_resistant": crop_resistant_hash,
    "crop_resistant_segmented": crop_resistant_segmented_hash,
}

# Methods producing a single hash_size x hash_size bit grid
SQUARE_METHODS = frozenset({"ahash", "dhash", "dhash_vertical", "phash", "whash"})


def get_method(name: str) -> HashFunc:
    try:
        return METHODS[name]
    except KeyError:
        raise ConfigError(f"Unknown hash method: {name!r} (known: {', '.join(METHODS)})") from None


def expected_bit_length(method: str, hash_size: int = 8, grid_size: int = 2, segments: int = 4) -> int:
    get_method(method)
    check_hash_size(hash_size)
    cell = hash_size * hash_size
    if method == "colorhash":
        return 3 * cell
    if method == "crop_resistant":
        check_positive("grid_size", grid_size)
        return grid_size * grid_size * cell
    if method == "crop_resistant_segmented":
        check_positive("segments", segments)
        return segments * cell
    return cell


def hash_from_hex(
    hex_str: str,
    method: str = "ahash",
    hash_size: int = 8,
    grid_size: int = 2,
    segments: int = 4,
) -> ImageHash:
    """Decode a stored hash, checking it has exactly the bit count ``method`` produces."""
    bit_length = expected_bit_length(method, hash_size, grid_size=grid_size, segments=segments)
    return ImageHash.from_hex(hex_str, bit_length)


def square_hash_from_hex(hex_str: str) -> ImageHash:
    """Decode a hex string as a square S x S hash, inferring S from its length."""
    total = len(hex_str) * 4
    side = math.isqrt(total)
    if side < 2 or side * side != total:
        raise HashFormatError(
            f"Hex string of {len(hex_str)} chars ({total} bits) does not represent a square hash"
        )
    return ImageHash.from_hex(hex_str, total)

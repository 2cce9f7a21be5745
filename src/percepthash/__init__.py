"""percepthash: perceptual image hashes (aHash, dHash, pHash, wHash, color, crop-resistant)."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .config import HashConfig
from .core import Comparison, ImageHasher
from .errors import (
    ConfigError,
    DecodeError,
    EmptySampleError,
    HashFormatError,
    HashLengthMismatchError,
    PercepthashError,
)
from .hash_value import ImageHash, similarity
from .hashes.average import average_hash
from .hashes.color import color_hash
from .hashes.crop_resistant import crop_resistant_hash, crop_resistant_segmented_hash
from .hashes.difference import difference_hash, horizontal_difference_hash, vertical_difference_hash
from .hashes.perceptual import perceptual_hash
from .hashes.registry import hash_from_hex, square_hash_from_hex
from .hashes.wavelet import wavelet_hash

try:
    __version__ = version("percepthash")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "ImageHasher",
    "Comparison",
    "HashConfig",
    "ImageHash",
    "similarity",
    "average_hash",
    "difference_hash",
    "horizontal_difference_hash",
    "vertical_difference_hash",
    "perceptual_hash",
    "wavelet_hash",
    "color_hash",
    "crop_resistant_hash",
    "crop_resistant_segmented_hash",
    "hash_from_hex",
    "square_hash_from_hex",
    "PercepthashError",
    "ConfigError",
    "DecodeError",
    "HashLengthMismatchError",
    "HashFormatError",
    "EmptySampleError",
    "__version__",
]

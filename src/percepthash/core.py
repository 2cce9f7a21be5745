from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .config import HashConfig
from .hash_value import ImageHash, similarity
from .hashes.average import average_hash
from .hashes.color import color_hash
from .hashes.crop_resistant import crop_resistant_hash, crop_resistant_segmented_hash
from .hashes.difference import difference_hash
from .hashes.perceptual import perceptual_hash
from .hashes.registry import get_method, hash_from_hex
from .hashes.wavelet import wavelet_hash
from .imaging.preprocess import ImageSource, decode_image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Comparison:
    distance: int
    bit_length: int
    similarity: float
    is_duplicate: bool


class ImageHasher:
    """Config-driven front end over the hash functions.

    Holds a private copy of the config; every method is otherwise a pure
    function of its arguments.
    """

    def __init__(self, config: Optional[HashConfig] = None, preset: str = "default") -> None:
        cfg = config if config is not None else HashConfig.load_preset(preset)
        self.cfg = copy.deepcopy(cfg).validate()

    # helpers
    def _size(self, hash_size: Optional[int]) -> int:
        return self.cfg.hash_size if hash_size is None else hash_size

    def _kwargs(self, method: str, hash_size: Optional[int]) -> Dict[str, Any]:
        cfg = self.cfg
        kw: Dict[str, Any] = {"hash_size": self._size(hash_size)}
        if method == "phash":
            kw["highfreq_factor"] = cfg.highfreq_factor
        elif method == "whash":
            kw.update(mode=cfg.wavelet_mode, scale=cfg.wavelet_scale)
        elif method == "crop_resistant":
            kw.update(grid_size=cfg.grid_size, highfreq_factor=cfg.highfreq_factor)
        elif method == "crop_resistant_segmented":
            kw.update(
                segments=cfg.segments,
                window=cfg.segment_window,
                work_width=cfg.segment_work_width,
                highfreq_factor=cfg.highfreq_factor,
            )
        return kw

    # algorithms
    def average_hash(self, image: ImageSource, hash_size: Optional[int] = None) -> ImageHash:
        return average_hash(image, hash_size=self._size(hash_size))

    def difference_hash(
        self,
        image: ImageSource,
        hash_size: Optional[int] = None,
        horizontal: Optional[bool] = None,
    ) -> ImageHash:
        if horizontal is None:
            horizontal = self.cfg.dhash_horizontal
        return difference_hash(image, hash_size=self._size(hash_size), horizontal=horizontal)

    def perceptual_hash(self, image: ImageSource, hash_size: Optional[int] = None) -> ImageHash:
        return perceptual_hash(image, **self._kwargs("phash", hash_size))

    def wavelet_hash(self, image: ImageSource, hash_size: Optional[int] = None) -> ImageHash:
        return wavelet_hash(image, **self._kwargs("whash", hash_size))

    def color_hash(self, image: ImageSource, hash_size: Optional[int] = None) -> ImageHash:
        return color_hash(image, hash_size=self._size(hash_size))

    def crop_resistant_hash(self, image: ImageSource, hash_size: Optional[int] = None) -> ImageHash:
        return crop_resistant_hash(image, **self._kwargs("crop_resistant", hash_size))

    def crop_resistant_segmented_hash(self, image: ImageSource, hash_size: Optional[int] = None) -> ImageHash:
        return crop_resistant_segmented_hash(image, **self._kwargs("crop_resistant_segmented", hash_size))

    # main
    def hash(self, image: ImageSource, method: str = "phash", hash_size: Optional[int] = None) -> ImageHash:
        if method == "dhash" and not self.cfg.dhash_horizontal:
            method = "dhash_vertical"
        func = get_method(method)
        return func(image, **self._kwargs(method, hash_size))

    def hash_bytes(self, data: bytes, method: str = "phash", hash_size: Optional[int] = None) -> ImageHash:
        return self.hash(decode_image(data), method=method, hash_size=hash_size)

    def from_hex(self, hex_str: str, method: str = "phash", hash_size: Optional[int] = None) -> ImageHash:
        return hash_from_hex(
            hex_str,
            method=method,
            hash_size=self._size(hash_size),
            grid_size=self.cfg.grid_size,
            segments=self.cfg.segments,
        )

    def compare(self, a: Union[ImageSource, ImageHash], b: Union[ImageSource, ImageHash], method: str = "phash") -> Comparison:
        """Compare two images (or precomputed hashes) with one method."""
        ha = a if isinstance(a, ImageHash) else self.hash(a, method)
        hb = b if isinstance(b, ImageHash) else self.hash(b, method)
        d = ha.distance(hb)
        result = Comparison(
            distance=d,
            bit_length=len(ha),
            similarity=similarity(ha, hb),
            is_duplicate=d <= self.cfg.max_hamming,
        )
        logger.debug("%s: %s vs %s -> %s", method, ha, hb, result)
        return result

    def find_duplicates(
        self,
        images: Sequence[Union[ImageSource, ImageHash]],
        method: str = "phash",
    ) -> List[Tuple[int, int, int]]:
        """Return (i, j, distance) for every pair i < j within max_hamming.

        Items may be image sources or precomputed hashes; strings are paths.
        """
        hashes = [item if isinstance(item, ImageHash) else self.hash(item, method) for item in images]

        pairs: List[Tuple[int, int, int]] = []
        for j, hj in enumerate(hashes):
            for i in range(j):
                d = hashes[i].distance(hj)
                if d <= self.cfg.max_hamming:
                    pairs.append((i, j, d))
        pairs.sort()
        logger.debug("%s: %d duplicate pair(s) among %d image(s)", method, len(pairs), len(hashes))
        return pairs

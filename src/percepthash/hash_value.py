"""Immutable bit-vector hash with hex codec and Hamming distance."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np

from .errors import HashFormatError, HashLengthMismatchError

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class ImageHash:
    """Fixed-length ordered bit vector produced by a hash algorithm.

    Equality is total (hashes of different lengths are simply unequal), while
    ``distance`` / ``-`` refuses to compare hashes of different lengths.
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: Iterable[object]) -> None:
        if isinstance(bits, (str, bytes, bytearray)):
            raise HashFormatError("ImageHash takes a sequence of bits; use ImageHash.from_hex for hex strings")
        arr = np.array([bool(b) for b in bits], dtype=bool)
        if arr.size == 0:
            raise HashFormatError("ImageHash needs at least one bit")
        arr.setflags(write=False)
        self._bits = arr

    @classmethod
    def from_bits(cls, bits: Iterable[object]) -> "ImageHash":
        return cls(bits)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "ImageHash":
        obj = cls.__new__(cls)
        flat = np.array(arr, dtype=bool).ravel()
        if flat.size == 0:
            raise HashFormatError("ImageHash needs at least one bit")
        flat.setflags(write=False)
        obj._bits = flat
        return obj

    @classmethod
    def from_hex(cls, hex_str: str, bit_length: Optional[int] = None) -> "ImageHash":
        """Decode a hex string (4 bits per digit, MSB first).

        ``bit_length`` defaults to ``4 * len(hex_str)``. When it is not a
        multiple of four the last digit carries right-padding zeros.
        """
        if not isinstance(hex_str, str):
            raise HashFormatError(f"Hex hash must be a string, got {type(hex_str).__name__}")
        if not hex_str or any(c not in _HEX_DIGITS for c in hex_str):
            raise HashFormatError(f"Invalid hex hash: {hex_str!r}")

        if bit_length is None:
            bit_length = len(hex_str) * 4
        if bit_length < 1:
            raise HashFormatError(f"bit_length must be positive, got {bit_length}")

        expected_chars = (bit_length + 3) // 4
        if len(hex_str) != expected_chars:
            raise HashFormatError(
                f"Hex string length does not match bit length: expected {bit_length} bits "
                f"({expected_chars} hex chars), got {len(hex_str) * 4} bits ({len(hex_str)} hex chars)"
            )

        nibbles = np.array([int(c, 16) for c in hex_str], dtype=np.uint8)
        bits = ((nibbles[:, None] >> np.array([3, 2, 1, 0], dtype=np.uint8)) & 1).astype(bool).ravel()
        if bits[bit_length:].any():
            raise HashFormatError(f"Non-zero padding bits in {hex_str!r} for a {bit_length}-bit hash")
        return cls.from_array(bits[:bit_length])

    @property
    def bits(self) -> Tuple[bool, ...]:
        return tuple(bool(b) for b in self._bits)

    def to_array(self) -> np.ndarray:
        return self._bits.copy()

    def to_hex(self) -> str:
        n = self._bits.size
        padded = np.zeros(((n + 3) // 4) * 4, dtype=np.uint8)
        padded[:n] = self._bits
        nibbles = padded.reshape(-1, 4) @ np.array([8, 4, 2, 1], dtype=np.uint8)
        return "".join(format(int(v), "x") for v in nibbles)

    def distance(self, other: "ImageHash") -> int:
        if not isinstance(other, ImageHash):
            raise TypeError(f"Cannot compare ImageHash with {type(other).__name__}")
        if len(self) != len(other):
            raise HashLengthMismatchError(
                f"ImageHashes must be of the same length: {len(self)} vs {len(other)}"
            )
        return int(np.count_nonzero(self._bits != other._bits))

    def __sub__(self, other: "ImageHash") -> int:
        if not isinstance(other, ImageHash):
            return NotImplemented
        return self.distance(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageHash):
            return NotImplemented
        return len(self) == len(other) and bool(np.array_equal(self._bits, other._bits))

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        if eq is NotImplemented:
            return eq
        return not eq

    def __hash__(self) -> int:
        return hash((self._bits.size, self._bits.tobytes()))

    def __len__(self) -> int:
        return int(self._bits.size)

    def __copy__(self) -> "ImageHash":
        return self

    def __deepcopy__(self, memo: dict) -> "ImageHash":
        return self

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"ImageHash({self.to_hex()!r}, bits={len(self)})"


def similarity(a: ImageHash, b: ImageHash) -> float:
    """Fraction of matching bits, 1.0 for identical hashes."""
    return 1.0 - a.distance(b) / len(a)

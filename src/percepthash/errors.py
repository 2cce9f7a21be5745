from __future__ import annotations


class PercepthashError(RuntimeError):
    """Base error for percepthash."""


class ConfigError(PercepthashError, ValueError):
    """Raised for invalid hashing parameters or presets."""


class DecodeError(PercepthashError):
    """Raised when Pillow cannot decode the input as an image."""


class HashLengthMismatchError(PercepthashError, ValueError):
    """Raised when comparing hashes of different bit lengths."""


class HashFormatError(PercepthashError, ValueError):
    """Raised for malformed hex strings or empty bit vectors."""


class EmptySampleError(PercepthashError):
    """Raised when a statistic is requested over zero samples."""

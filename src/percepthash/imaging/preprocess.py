from __future__ import annotations

import io
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from ..errors import DecodeError

ImageSource = Union[Image.Image, bytes, bytearray, memoryview, str, Path]

# Every algorithm resizes through this one filter so that hashes from
# different code paths stay comparable.
RESAMPLE = Image.Resampling.BOX


def decode_image(data: Union[bytes, bytearray, memoryview]) -> Image.Image:
    """Decode encoded image bytes (PNG, JPEG, ...) into a loaded PIL image."""
    try:
        im = Image.open(io.BytesIO(bytes(data)))
        im.load()
    except (UnidentifiedImageError, OSError) as e:
        raise DecodeError(f"Could not decode image bytes ({len(data)} bytes)") from e
    return im


def load_image(source: ImageSource) -> Image.Image:
    if isinstance(source, Image.Image):
        return source
    if isinstance(source, (bytes, bytearray, memoryview)):
        return decode_image(source)
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(str(path))
        try:
            with Image.open(path) as im:
                im.load()
        except (UnidentifiedImageError, OSError) as e:
            raise DecodeError(f"Could not decode image file: {path}") from e
        return im
    raise TypeError(f"Unsupported image source: {type(source).__name__}")


def to_grayscale(im: Image.Image) -> Image.Image:
    return im if im.mode == "L" else im.convert("L")


def to_rgb(im: Image.Image) -> Image.Image:
    return im if im.mode == "RGB" else im.convert("RGB")


def resize_for_hash(im: Image.Image, width: int, height: int) -> Image.Image:
    if im.size == (width, height):
        return im
    return im.resize((width, height), RESAMPLE)


def prepare(im: Image.Image, width: int, height: int, grayscale: bool = True) -> Image.Image:
    """Convert (grayscale or RGB) and resize to exactly ``width`` x ``height``."""
    im = to_grayscale(im) if grayscale else to_rgb(im)
    return resize_for_hash(im, width, height)


def crop(im: Image.Image, x: int, y: int, width: int, height: int) -> Image.Image:
    return im.crop((x, y, x + width, y + height))

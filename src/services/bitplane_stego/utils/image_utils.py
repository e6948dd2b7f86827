"""
Image utility functions for bit-plane steganography operations

The PNG container itself is handled by Pillow; this module only moves pixel
data between Pillow and a numpy-backed PixelGrid.
"""

from io import BytesIO
from typing import Optional, Tuple

import httpx
import numpy as np
from PIL import Image, UnidentifiedImageError

from ..core.errors import InvalidInputError, OutputError
from ..models.stego_models import Point, Rectangle


CHANNELS_PER_PIXEL = 4
SUPPORTED_MODE = "RGBA"


class PixelGrid:
    """
    Decoded RGBA image with four independently writable 8-bit samples per pixel

    Coordinates are absolute within ``bounds``; the backing array is indexed
    relative to ``bounds.min``.
    """

    def __init__(self, pixels: np.ndarray, bounds: Optional[Rectangle] = None):
        if pixels.ndim != 3 or pixels.shape[2] != CHANNELS_PER_PIXEL or pixels.dtype != np.uint8:
            raise InvalidInputError(
                f"pixel grid must be (height, width, {CHANNELS_PER_PIXEL}) uint8, got {pixels.shape} {pixels.dtype}"
            )
        height, width, _ = pixels.shape
        self.pixels = pixels
        self.bounds = bounds or Rectangle.from_size(width, height)
        if self.bounds.width != width or self.bounds.height != height:
            raise InvalidInputError(f"bounds {self.bounds} do not match pixel data {width}x{height}")

    @classmethod
    def from_image(cls, image: Image.Image, raw_mode: Optional[str] = None) -> "PixelGrid":
        if image.mode != SUPPORTED_MODE:
            raise InvalidInputError(
                f"unsupported channel model: expected {SUPPORTED_MODE}, got {image.mode}", mode=image.mode
            )
        if raw_mode is not None and not is_eight_bit(raw_mode):
            raise InvalidInputError(
                f"unsupported sample depth: expected 8 bits per channel, got {raw_mode}", mode=raw_mode
            )
        return cls(np.array(image, dtype=np.uint8))

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    def _index(self, point: Point) -> Tuple[int, int]:
        return point.y - self.bounds.min.y, point.x - self.bounds.min.x

    def at(self, point: Point) -> Tuple[int, int, int, int]:
        row, col = self._index(point)
        r, g, b, a = (int(v) for v in self.pixels[row, col])
        return r, g, b, a

    def set(self, point: Point, rgba: Tuple[int, int, int, int]) -> None:
        row, col = self._index(point)
        self.pixels[row, col] = rgba

    def channel(self, point: Point, index: int) -> int:
        row, col = self._index(point)
        return int(self.pixels[row, col, index])

    def set_channel(self, point: Point, index: int, value: int) -> None:
        row, col = self._index(point)
        self.pixels[row, col, index] = value


def is_eight_bit(raw_mode: Optional[str]) -> bool:
    """True unless the decoder's raw mode stores more than 8 bits per sample (e.g. ``RGBA;16B``)."""
    return raw_mode is None or ";16" not in raw_mode


def open_image(data: bytes) -> Tuple[Image.Image, Optional[str]]:
    """
    Open and fully decode image bytes

    Pillow narrows 16-bit samples to 8 bits on load, so the raw mode is read
    from the decoder tile before loading.

    Returns:
        Tuple of (loaded image, raw mode of the stored pixels or None)

    Raises:
        InvalidInputError: If the bytes are not a decodable image
    """
    try:
        image = Image.open(BytesIO(data))
        raw_mode = None
        for tile in image.tile:
            args = tile[3]
            if isinstance(args, tuple):
                args = args[0] if args else None
            if isinstance(args, str):
                raw_mode = args
                break
        image.load()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise InvalidInputError(f"failed to decode image: {exc}") from exc
    return image, raw_mode


def decode_image(data: bytes) -> PixelGrid:
    """
    Decode image bytes into a PixelGrid

    Args:
        data: Encoded image (PNG or any lossless format Pillow can read)

    Returns:
        PixelGrid backed by a fresh array

    Raises:
        InvalidInputError: If the bytes are not an image, not RGBA, or not 8 bits per sample
    """
    image, raw_mode = open_image(data)
    return PixelGrid.from_image(image, raw_mode)


def encode_image(grid: PixelGrid) -> bytes:
    """
    Encode a PixelGrid as PNG bytes

    Raises:
        OutputError: If Pillow cannot serialize the pixels
    """
    buffer = BytesIO()
    try:
        grid.to_image().save(buffer, format="PNG")
    except (OSError, ValueError, TypeError) as exc:
        raise OutputError(f"failed to encode image: {exc}") from exc
    return buffer.getvalue()


def prepare_carrier(data: bytes) -> bytes:
    """
    Convert any readable image to an RGBA PNG suitable as a carrier

    Args:
        data: Encoded image in any mode

    Returns:
        8-bit RGBA PNG bytes (unchanged input if already one)
    """
    image, raw_mode = open_image(data)

    if image.mode == SUPPORTED_MODE and image.format == "PNG" and is_eight_bit(raw_mode):
        return data
    return encode_image(PixelGrid(np.array(image.convert(SUPPORTED_MODE), dtype=np.uint8)))


def load_image_bytes(file: Optional[BytesIO] = None, url: Optional[str] = None) -> bytes:
    """
    Load raw image bytes from either a file object or URL

    Args:
        file: BytesIO object containing image data
        url: URL to fetch image from

    Returns:
        Raw image bytes

    Raises:
        ValueError: If neither file nor url is provided
    """
    if file is not None:
        return file.read()
    if url is not None:
        with httpx.Client(timeout=30) as client:
            resp = client.get(url)
            resp.raise_for_status()
            return resp.content
    raise ValueError("Provide file or url")

import struct
import zlib
from io import BytesIO

import numpy as np
import pytest
from PIL import Image


def png_bytes(pixels: np.ndarray) -> bytes:
    buffer = BytesIO()
    Image.fromarray(pixels).save(buffer, format="PNG")
    return buffer.getvalue()


def random_pixels(width: int, height: int, channels: int = 4, seed: int = 7) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, channels), dtype=np.uint8)


def read_pixels(data: bytes) -> np.ndarray:
    return np.array(Image.open(BytesIO(data)))


@pytest.fixture
def make_carrier():
    """Return a factory producing random RGBA PNG bytes of a given size."""
    def factory(width: int = 10, height: int = 10, seed: int = 7) -> bytes:
        return png_bytes(random_pixels(width, height, seed=seed))
    return factory


@pytest.fixture
def carrier(make_carrier) -> bytes:
    return make_carrier(10, 10)


@pytest.fixture
def rgb_carrier() -> bytes:
    return png_bytes(random_pixels(10, 10, channels=3))


def png16_bytes(width: int, height: int, sample: int) -> bytes:
    """RGBA PNG with 16 bits per sample, every sample set to ``sample``."""
    def chunk(kind: bytes, body: bytes) -> bytes:
        return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", zlib.crc32(kind + body))

    row = b"\x00" + struct.pack(">H", sample) * (4 * width)
    header = struct.pack(">IIBBBBB", width, height, 16, 6, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(row * height))
        + chunk(b"IEND", b"")
    )

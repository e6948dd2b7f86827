"""
Exception classes for bit-plane steganography
"""

from __future__ import annotations

from typing import Optional

from ..models.stego_models import Point, Rectangle


class StegoError(Exception):
    """Base class for steganography-related exceptions."""
    pass


class InvalidArgumentError(StegoError, ValueError):
    """Raised when a caller-supplied argument is unusable (empty message, bad bit position, bad ordering)."""
    pass


class OutOfBoundsError(StegoError, ValueError):
    """Raised when the start or end point lies outside the image"""
    def __init__(self, which: str, point: Point, bounds: Rectangle, message: str = ""):
        self.which = which
        self.point = point
        self.bounds = bounds
        self.message = message or f"{which} point out of bounds: {point} not in {bounds}"
        super().__init__(self.message)


class InvalidInputError(StegoError, ValueError):
    """Raised when the source bytes are not a decodable image or use an unsupported channel model."""
    def __init__(self, message: str, mode: Optional[str] = None):
        self.mode = mode
        self.message = message
        super().__init__(message)


class OutputError(StegoError):
    """Cannot serialize or write the encoded image"""
    pass

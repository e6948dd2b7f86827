"""
Validation utilities for bit-plane steganography operations
"""

from ..core.errors import InvalidArgumentError, OutOfBoundsError
from ..models.stego_models import Point, Rectangle


MIN_BIT_POSITION = 0
MAX_BIT_POSITION = 7


def in_bounds(bounds: Rectangle, point: Point) -> bool:
    """
    Check that a point lies inside a half-open rectangle

    Args:
        bounds: Image rectangle
        point: Pixel coordinate

    Returns:
        True if min <= point < max on both axes
    """
    if point.x < bounds.min.x or point.y < bounds.min.y:
        return False
    if point.x >= bounds.max.x or point.y >= bounds.max.y:
        return False
    return True


def precedes(a: Point, b: Point) -> bool:
    """
    Strict row-major ordering: True if a is visited before b in a row-major scan

    Equal points do not precede each other, so an empty region is never valid.

    Args:
        a: First point
        b: Second point

    Returns:
        True if a comes strictly before b
    """
    if a.y != b.y:
        return a.y < b.y
    return a.x < b.x


def validate_bit_position(bit_position: int) -> None:
    """
    Validate the bit position parameter

    Args:
        bit_position: Bit of the channel value that carries the payload

    Raises:
        InvalidArgumentError: If bit_position is outside 0-7
    """
    if isinstance(bit_position, bool) or not isinstance(bit_position, int):
        raise InvalidArgumentError(f"msg bit must be an integer, got {type(bit_position).__name__}")
    if bit_position < MIN_BIT_POSITION or bit_position > MAX_BIT_POSITION:
        raise InvalidArgumentError(
            f"msg bit out of bounds: got {bit_position}, wanted {MIN_BIT_POSITION}-{MAX_BIT_POSITION} inclusive"
        )


def validate_message(message: bytes) -> None:
    """
    Validate that the message is a non-empty byte string

    Raises:
        InvalidArgumentError: If the message is empty or not bytes
    """
    if not isinstance(message, (bytes, bytearray)):
        raise InvalidArgumentError(f"message must be bytes, got {type(message).__name__}")
    if len(message) == 0:
        raise InvalidArgumentError("msg is zero length")


def validate_region(bounds: Rectangle, start: Point, end: Point) -> None:
    """
    Validate that both ends of a payload region lie inside the image

    Raises:
        OutOfBoundsError: Naming the first offending point
    """
    if not in_bounds(bounds, start):
        raise OutOfBoundsError("start", start, bounds)
    if not in_bounds(bounds, end):
        raise OutOfBoundsError("end", end, bounds)


def validate_ordering(start: Point, end: Point) -> None:
    """
    Raises:
        InvalidArgumentError: If start does not precede end
    """
    if not precedes(start, end):
        raise InvalidArgumentError(f"start point {start} does not precede end point {end}")

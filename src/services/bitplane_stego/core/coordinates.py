"""
Address arithmetic between linear bit offsets and pixel coordinates
"""

from ..models.stego_models import Point, Rectangle


def offset_from_origin(bounds: Rectangle, point: Point) -> int:
    """
    Linear row-major index of a point, measured from the rectangle's minimum corner

    No bounds check is performed; use ``in_bounds`` first.

    Args:
        bounds: Image rectangle
        point: Pixel coordinate inside bounds

    Returns:
        Zero-based linear offset
    """
    return (point.y - bounds.min.y) * bounds.width + (point.x - bounds.min.x)


def point_at_offset(bounds: Rectangle, start: Point, bit_count: int) -> Point:
    """
    Coordinate immediately after the last of bit_count pixels written from start

    The result is the exclusive end of a payload region. It may fall outside
    bounds, in which case the caller's bounds check rejects it.

    Args:
        bounds: Image rectangle
        start: First pixel of the region
        bit_count: Number of pixels (bits) to advance, must be positive

    Returns:
        End coordinate
    """
    width = bounds.width
    rows, remainder = divmod(bit_count, width)
    x = start.x
    y = start.y + rows

    if x + remainder > bounds.max.x:
        # wrap onto the next row
        y += 1
        remainder -= bounds.max.x - x
        x = bounds.min.x

    return Point(x=x + remainder, y=y)

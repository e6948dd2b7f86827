"""
Core bit-plane algorithms for embedding and extracting a message

One message bit is stored per pixel, in a single selectable bit of the red
channel. Pixels are visited in row-major order from ``start`` up to, but not
including, ``end``.
"""

from typing import Optional, Tuple

from ..models.stego_models import Point
from ..utils.image_utils import PixelGrid, decode_image, encode_image
from ..utils.validation import (
    validate_bit_position,
    validate_message,
    validate_ordering,
    validate_region,
)
from .bits import BITS_PER_BYTE, bits_to_byte, byte_to_bits
from .coordinates import offset_from_origin, point_at_offset


# Channel index that carries payload bits (R of RGBA)
PAYLOAD_CHANNEL = 0


class BitPlaneCodec:
    """
    Writes and reads messages in one bit plane of the red channel

    The bit position defaults to the least significant bit. Setting it to a
    high bit makes the message visible to the naked eye.
    """

    def __init__(self, bit_position: int = 0):
        self._bit_position = 0
        self.bit_position = bit_position

    @property
    def bit_position(self) -> int:
        return self._bit_position

    @bit_position.setter
    def bit_position(self, value: int) -> None:
        validate_bit_position(value)
        self._bit_position = value

    def set_msg_bit(self, n: int) -> None:
        """Select which bit (0 = LSB, 7 = MSB) each pixel uses for its part of the message."""
        self.bit_position = n

    def _resolve_bit(self, bit_position: Optional[int]) -> int:
        if bit_position is None:
            return self._bit_position
        validate_bit_position(bit_position)
        return bit_position

    def encode(
        self,
        image_bytes: bytes,
        message: bytes,
        start: Point,
        bit_position: Optional[int] = None,
    ) -> Tuple[Point, bytes]:
        """
        Copy an image with message stored inside it

        The message needs ``len(message) * 8`` pixels from start.

        Args:
            image_bytes: Encoded RGBA carrier image
            message: Non-empty payload
            start: First pixel to write
            bit_position: Overrides the codec's bit position for this call

        Returns:
            Tuple of (end, png_bytes) where end is the first pixel after the message

        Raises:
            InvalidArgumentError: Empty message or bad bit position
            InvalidInputError: Undecodable or non-RGBA image
            OutOfBoundsError: Start or end outside the image
            OutputError: The encoded image cannot be serialized
        """
        validate_message(message)
        bit = self._resolve_bit(bit_position)

        grid = decode_image(image_bytes)
        end = self.encode_grid(grid, message, start, bit)
        return end, encode_image(grid)

    def decode(
        self,
        image_bytes: bytes,
        start: Point,
        end: Point,
        bit_position: Optional[int] = None,
    ) -> bytes:
        """
        Read the message stored between start and end

        Raises:
            InvalidArgumentError: start does not precede end, or bad bit position
            InvalidInputError: Undecodable or non-RGBA image
            OutOfBoundsError: Start or end outside the image
        """
        validate_ordering(start, end)
        bit = self._resolve_bit(bit_position)

        grid = decode_image(image_bytes)
        return self.decode_grid(grid, start, end, bit)

    def encode_grid(
        self,
        grid: PixelGrid,
        message: bytes,
        start: Point,
        bit_position: Optional[int] = None,
    ) -> Point:
        """
        Write message into grid in place and return the end point

        Nothing is written unless both start and end are inside the grid.
        """
        validate_message(message)
        bit = self._resolve_bit(bit_position)
        bounds = grid.bounds

        end = point_at_offset(bounds, start, len(message) * BITS_PER_BYTE)
        validate_region(bounds, start, end)

        set_mask = 1 << bit
        clear_mask = 0xFF ^ set_mask
        offset = offset_from_origin(bounds, start)
        current = byte_to_bits(message[0])

        # i is the absolute scan position, payload bits are counted from start
        i = 0
        for y in range(bounds.min.y, bounds.max.y):
            for x in range(bounds.min.x, bounds.max.x):
                if y < start.y or (y == start.y and x < start.x):
                    i += 1
                    continue

                if x == end.x and y == end.y:
                    return end

                payload_index = i - offset
                mod = payload_index % BITS_PER_BYTE
                if mod == 0:
                    current = byte_to_bits(message[payload_index // BITS_PER_BYTE])

                point = Point(x=x, y=y)
                value = grid.channel(point, PAYLOAD_CHANNEL)
                if current[mod]:
                    value |= set_mask
                else:
                    value &= clear_mask
                grid.set_channel(point, PAYLOAD_CHANNEL, value)

                i += 1

        return end

    def decode_grid(
        self,
        grid: PixelGrid,
        start: Point,
        end: Point,
        bit_position: Optional[int] = None,
    ) -> bytes:
        """
        Read the message stored in grid between start and end

        Trailing bits that do not fill a whole byte are dropped.
        """
        validate_ordering(start, end)
        bit = self._resolve_bit(bit_position)
        bounds = grid.bounds
        validate_region(bounds, start, end)

        mask = 1 << bit
        offset = offset_from_origin(bounds, start)
        buffer = [False] * BITS_PER_BYTE
        message = bytearray()

        i = 0
        for y in range(bounds.min.y, bounds.max.y):
            for x in range(bounds.min.x, bounds.max.x):
                if y < start.y or (y == start.y and x < start.x):
                    i += 1
                    continue

                if x == end.x and y == end.y:
                    return bytes(message)

                mod = (i - offset) % BITS_PER_BYTE
                buffer[mod] = bool(grid.channel(Point(x=x, y=y), PAYLOAD_CHANNEL) & mask)

                if mod == BITS_PER_BYTE - 1:
                    message.append(bits_to_byte(buffer))

                i += 1

        return bytes(message)

"""
Conversion between a byte and its eight bits, most significant bit first
"""

from typing import List, Sequence

from .errors import InvalidArgumentError


BITS_PER_BYTE = 8


def byte_to_bits(value: int) -> List[bool]:
    """
    Split a byte into 8 booleans, most significant bit first

    Index 0 holds bit 7 (weight 128) and index 7 holds bit 0 (weight 1).

    Args:
        value: Byte value (0-255)

    Returns:
        List of 8 booleans
    """
    if not 0 <= value <= 0xFF:
        raise InvalidArgumentError(f"byte value out of range: got {value}, wanted 0-255 inclusive")

    bits = []
    residual = value
    for i in range(BITS_PER_BYTE):
        weight = 1 << (BITS_PER_BYTE - 1 - i)
        if residual >= weight:
            bits.append(True)
            residual -= weight
        else:
            bits.append(False)
    return bits


def bits_to_byte(bits: Sequence[bool]) -> int:
    """
    Reassemble a byte from 8 booleans, most significant bit first

    Args:
        bits: Exactly 8 bit values

    Returns:
        Byte value (0-255)

    Raises:
        InvalidArgumentError: If bits does not hold exactly 8 values
    """
    if len(bits) != BITS_PER_BYTE:
        raise InvalidArgumentError(f"expected {BITS_PER_BYTE} bits, got {len(bits)}")

    value = 0
    for i, bit in enumerate(bits):
        if bit:
            value += 1 << (BITS_PER_BYTE - 1 - i)
    return value

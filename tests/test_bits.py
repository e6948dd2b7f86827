import pytest

from src.services.bitplane_stego.core.bits import bits_to_byte, byte_to_bits
from src.services.bitplane_stego.core.errors import InvalidArgumentError


def test_bits_are_most_significant_first():
    assert byte_to_bits(0b10100001) == [True, False, True, False, False, False, False, True]


def test_zero_and_full_byte():
    assert byte_to_bits(0) == [False] * 8
    assert byte_to_bits(255) == [True] * 8


def test_pack_inverts_unpack_for_every_byte():
    for value in range(256):
        assert bits_to_byte(byte_to_bits(value)) == value


def test_bits_to_byte_weights():
    assert bits_to_byte([True] + [False] * 7) == 128
    assert bits_to_byte([False] * 7 + [True]) == 1


@pytest.mark.parametrize("length", [0, 7, 9])
def test_bits_to_byte_rejects_wrong_length(length):
    with pytest.raises(InvalidArgumentError):
        bits_to_byte([False] * length)


@pytest.mark.parametrize("value", [-1, 256])
def test_byte_to_bits_rejects_out_of_range(value):
    with pytest.raises(InvalidArgumentError):
        byte_to_bits(value)

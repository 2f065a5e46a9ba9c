from bitbloom.bit_vec import BitVec

import pytest


def test_new_is_zeroed():
    bits = BitVec(4)
    assert len(bits) == 4
    assert bits.length_bytes() == 4
    assert bits.capacity_in_bits() == 32
    assert not any(bits.test(i) for i in range(32))


@pytest.mark.parametrize(
    "offset,byte_offset,byte_value",
    [
        (0, 0, 0b00000001),
        (7, 0, 0b10000000),
        (8, 1, 0b00000001),
        (9, 1, 0b00000010),
        (31, 3, 0b10000000),
    ],
)
def test_set_layout(offset, byte_offset, byte_value):
    bits = BitVec(4)
    bits.set(offset)
    assert bits.test(offset)
    assert bits.bits[byte_offset] == byte_value
    assert sum(bits.test(i) for i in range(32)) == 1


def test_set_is_idempotent():
    bits = BitVec(2)
    bits.set(3)
    before = bytes(bits.bits)
    bits.set(3)
    assert bytes(bits.bits) == before


def test_clear():
    bits = BitVec(2)
    for i in (0, 5, 15):
        bits.set(i)
    bits.clear()
    assert bits.bits == bytearray(2)
    assert bits.capacity_in_bits() == 16


def test_copy_is_independent():
    bits = BitVec(1)
    bits.set(1)
    other = bits.copy()
    other.set(2)
    assert not bits.test(2)
    assert other.test(1)


@pytest.mark.parametrize("offset", [-1, 16, 100])
def test_out_of_bounds(offset):
    bits = BitVec(2)
    with pytest.raises((AssertionError, IndexError)):
        bits.test(offset)
    with pytest.raises((AssertionError, IndexError)):
        bits.set(offset)

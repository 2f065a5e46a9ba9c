from bitbloom.config import strict_bounds

BITS_PER_BYTE = 8


class BitVec:
    """
    A fixed size array of bits backed by a bytearray.
    Bit n lives in byte n // 8, at position n % 8 counting from the least significant bit.
    """

    def __init__(self, byte_count: int):
        self.bits = bytearray(byte_count)
        self.strict = strict_bounds()

    def __len__(self) -> int:
        return len(self.bits)

    def length_bytes(self) -> int:
        return len(self.bits)

    def capacity_in_bits(self) -> int:
        return len(self.bits) * BITS_PER_BYTE

    def _locate(self, bit_offset: int) -> tuple[int, int]:
        if self.strict:
            if not 0 <= bit_offset < self.capacity_in_bits():
                raise IndexError(
                    f"bit_offset {bit_offset} out of range [0, {self.capacity_in_bits()})"
                )
        else:
            assert (
                0 <= bit_offset < self.capacity_in_bits()
            ), "bit_offset out of bounds"
        return bit_offset // BITS_PER_BYTE, bit_offset % BITS_PER_BYTE

    def test(self, bit_offset: int) -> bool:
        byte_offset, bit_shift = self._locate(bit_offset)
        return bool(self.bits[byte_offset] & (1 << bit_shift))

    def set(self, bit_offset: int) -> None:
        byte_offset, bit_shift = self._locate(bit_offset)
        self.bits[byte_offset] |= 1 << bit_shift

    def clear(self) -> None:
        """Zero every bit in place, keeping the allocation"""
        self.bits[:] = bytes(len(self.bits))

    def copy(self) -> "BitVec":
        other = BitVec.__new__(BitVec)
        other.bits = bytearray(self.bits)
        other.strict = self.strict
        return other

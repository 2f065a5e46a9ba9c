import logging
from math import ceil, log, log2
from operator import index
from typing import Iterable, Iterator

from fixedint import UInt64

from bitbloom.bit_vec import BITS_PER_BYTE, BitVec
from bitbloom.hashing import Item, KeyedHasher, check_u64, to_bytes
from bitbloom.rng import RandomSource

logger = logging.getLogger(__name__)

Key = tuple[int, int]


class BloomFilter:
    """
    A Bloom filter sized for an expected number of items and a target false positive rate.

    Items are hashed once by two independently keyed 64 bit hashers and the
    k bit positions are derived by double hashing:

        g_i(x) = (h1(x) + i * h2(x)) mod m

    where m is the number of bits. There are no false negatives; inserting more
    than expected_capacity items only raises the false positive rate.
    """

    def __init__(
        self,
        expected_capacity: int,
        error_rate: float,
        keys: tuple[Key, Key],
    ):
        expected_capacity = self.validate(expected_capacity, error_rate)
        try:
            (key0, key1), (key2, key3) = keys
        except (TypeError, ValueError):
            raise ValueError(
                "keys must be two pairs of 64 bit words, e.g. ((0, 1), (2, 3))"
            ) from None
        self.hashers = (KeyedHasher(key0, key1), KeyedHasher(key2, key3))
        self.num_hash_functions = self.hash_fn_number(error_rate)
        self.array = BitVec(self.bit_vec_size(expected_capacity, error_rate))
        logger.debug(
            "BloomFilter created: bytes=%d, bits=%d, num_hash_functions=%d, "
            "expected_capacity=%d, error_rate=%g",
            self.array.length_bytes(),
            self.array.capacity_in_bits(),
            self.num_hash_functions,
            expected_capacity,
            error_rate,
        )

    @classmethod
    def from_rng(
        cls, expected_capacity: int, error_rate: float, rng: RandomSource
    ) -> "BloomFilter":
        """Build a filter whose hash keys are the next four words drawn from rng"""
        expected_capacity = cls.validate(expected_capacity, error_rate)
        words = [check_u64(rng.next_u64(), "random word") for _ in range(4)]
        return cls(
            expected_capacity,
            error_rate,
            ((words[0], words[1]), (words[2], words[3])),
        )

    @staticmethod
    def validate(expected_capacity: int, error_rate: float) -> int:
        """Check the sizing targets, returning expected_capacity as a plain int"""
        message = f"expected_capacity must be a positive int, got {expected_capacity!r}"
        if isinstance(expected_capacity, bool):
            raise ValueError(message)
        try:
            expected_capacity = index(expected_capacity)
        except TypeError:
            raise ValueError(message) from None
        if expected_capacity <= 0:
            raise ValueError(message)
        # written so that NaN is rejected too
        if not 0.0 < error_rate < 1.0:
            raise ValueError(
                f"error_rate must be strictly between 0 and 1, got {error_rate!r}"
            )
        return expected_capacity

    @staticmethod
    def bit_vec_size(expected_capacity: int, error_rate: float) -> int:
        """
        Bytes needed for the target error rate at the expected load:

            m = -(n * ln(e)) / (8 * ln(2) ** 2)
        """
        return ceil(
            -(expected_capacity * log(error_rate))
            / (BITS_PER_BYTE * log(2) ** 2)
        )

    @staticmethod
    def hash_fn_number(error_rate: float) -> int:
        """Optimal number of hash rounds, k = ceil(-log2(e))"""
        return ceil(-log2(error_rate))

    def bloom_hash(self, elem: Item) -> tuple[int, int]:
        data = to_bytes(elem)
        return self.hashers[0].digest(data), self.hashers[1].digest(data)

    def indices(self, elem: Item) -> Iterator[int]:
        h1, h2 = self.bloom_hash(elem)
        m = self.array.capacity_in_bits()
        for i in range(self.num_hash_functions):
            # wrap at 64 bits before reducing, every index is then < m
            yield int(UInt64(h1) + UInt64(i) * UInt64(h2)) % m

    def add(self, elem: Item) -> None:
        for index in self.indices(elem):
            self.array.set(index)

    insert = add

    def update(self, elems: Iterable[Item]) -> None:
        for elem in elems:
            self.add(elem)

    def contains(self, elem: Item) -> bool:
        for index in self.indices(elem):
            if not self.array.test(index):
                return False
        return True

    def __contains__(self, elem: Item) -> bool:
        return self.contains(elem)

    def capacity_in_bits(self) -> int:
        return self.array.capacity_in_bits()

    def clear(self) -> None:
        """Forget every inserted item. Size, k and the hash keys are kept."""
        self.array.clear()
        logger.debug("BloomFilter cleared: bits=%d", self.capacity_in_bits())

    def copy(self) -> "BloomFilter":
        other = BloomFilter.__new__(type(self))
        other.hashers = tuple(hasher.copy() for hasher in self.hashers)
        other.num_hash_functions = self.num_hash_functions
        other.array = self.array.copy()
        return other

    def __copy__(self) -> "BloomFilter":
        return self.copy()

    def __deepcopy__(self, memo) -> "BloomFilter":
        return self.copy()

    def __repr__(self) -> str:
        # never show the keys
        return (
            f"{type(self).__name__}(bits={self.capacity_in_bits()}, "
            f"num_hash_functions={self.num_hash_functions})"
        )

from hashlib import blake2b
from operator import index
from struct import pack
from typing import Protocol, Union, runtime_checkable

U64_MAX = 2**64 - 1
DIGEST_BYTE_LEN = 8

# Each kind of value gets its own prefix so that 1, "1" and b"1" never collide
TAG_BYTES = b"b"
TAG_STR = b"s"
TAG_INT = b"i"
TAG_BOOL = b"?"
TAG_TUPLE = b"t"
TAG_CUSTOM = b"o"


@runtime_checkable
class Hashable(Protocol):
    """
    Anything that can be inserted into a filter.
    Equal values must return identical bytes, in every process.
    """

    def __bloom_bytes__(self) -> bytes:
        ...


Item = Union[bytes, bytearray, memoryview, str, int, tuple, Hashable]


def _int_bytes(n: int) -> bytes:
    # -128 fits in one byte, 128 needs two
    length = (n + (n < 0)).bit_length() // 8 + 1
    return n.to_bytes(length, "little", signed=True)


def to_bytes(item: Item) -> bytes:
    """
    Reduce an item to the byte sequence fed to the hashers.
    The builtin hash() is salted per process for str and bytes, so it is never used here.
    """
    if isinstance(item, (bytes, bytearray, memoryview)):
        return TAG_BYTES + bytes(item)
    if isinstance(item, str):
        return TAG_STR + item.encode("utf-8", "surrogatepass")
    # bool is a subclass of int and has to be checked first
    if isinstance(item, bool):
        return TAG_BOOL + (b"\x01" if item else b"\x00")
    if isinstance(item, int):
        return TAG_INT + _int_bytes(item)
    if isinstance(item, tuple):
        out = TAG_TUPLE + pack("<Q", len(item))
        for element in item:
            encoded = to_bytes(element)
            out += pack("<Q", len(encoded)) + encoded
        return out
    if isinstance(item, Hashable):
        encoded = item.__bloom_bytes__()
        if not isinstance(encoded, (bytes, bytearray)):
            raise TypeError(
                f"{type(item).__name__}.__bloom_bytes__ returned {type(encoded).__name__}, expected bytes"
            )
        return TAG_CUSTOM + bytes(encoded)
    raise TypeError(f"cannot hash item of type {type(item).__name__}")


def check_u64(word: int, name: str = "word") -> int:
    if isinstance(word, bool):
        raise ValueError(f"{name} must be an int, got bool")
    try:
        word = index(word)
    except TypeError:
        raise ValueError(
            f"{name} must be an int, got {type(word).__name__}"
        ) from None
    if not 0 <= word <= U64_MAX:
        raise ValueError(f"{name} {word} is not in range [0, 2**64)")
    return word


class KeyedHasher:
    """
    A 64 bit BLAKE2b hash keyed with two 64 bit words.
    The keyed state is built once; every digest works on a copy of it.
    """

    def __init__(self, key0: int, key1: int):
        key = pack("<QQ", check_u64(key0, "key0"), check_u64(key1, "key1"))
        self.state = blake2b(key=key, digest_size=DIGEST_BYTE_LEN)

    def digest(self, data: bytes) -> int:
        h = self.state.copy()
        h.update(data)
        return int.from_bytes(h.digest(), "little")

    def copy(self) -> "KeyedHasher":
        other = KeyedHasher.__new__(KeyedHasher)
        other.state = self.state.copy()
        return other

from bitbloom.bloom import BloomFilter
from bitbloom.hashing import Hashable, to_bytes
from bitbloom.rng import Pcg64Source, RandomSource, SystemSource

__all__ = [
    "BloomFilter",
    "Hashable",
    "Pcg64Source",
    "RandomSource",
    "SystemSource",
    "to_bytes",
]

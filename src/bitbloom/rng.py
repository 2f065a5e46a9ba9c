import secrets
from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Supplies independent, uniformly distributed 64 bit words"""

    def next_u64(self) -> int:
        ...


class Pcg64Source:
    """Reproducible words from numpy's PCG64 bit generator"""

    def __init__(self, seed: int | None = None):
        self.bit_generator = np.random.PCG64(seed)

    def next_u64(self) -> int:
        return int(self.bit_generator.random_raw())


class SystemSource:
    """Words from the operating system's entropy pool"""

    def next_u64(self) -> int:
        return secrets.randbits(64)

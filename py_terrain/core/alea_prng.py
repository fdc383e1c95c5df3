"""
Python implementation of the Alea PRNG used for all landscape randomness.

Based on Johannes Baagøe's Alea algorithm. Every randomised stage owns its
own instance so that stages never share a stream.
"""

from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class RandomSource(Protocol):
    """Anything that yields floats in [0, 1) from ``next()``."""

    def next(self) -> float:
        ...


class AleaPRNG:
    """
    Alea PRNG with an explicit, resettable state.

    The generator never touches module or process state, so two instances
    built from the same seed always produce the same sequence.
    """

    def __init__(self, seed):
        """Initialize with seed string or number."""
        self.reseed(seed)

    def reseed(self, seed) -> None:
        """Reset the generator state from a new seed."""
        self.call_count = 0
        self.seed = seed

        # Convert arguments to array
        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            args = list(seed)
        else:
            args = [seed]

        # Mash function
        mash_n = 0xEFC8249D  # 4022871197

        def mash(data):
            nonlocal mash_n
            data = str(data)
            for char in data:
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000  # 2^32
            return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for arg in args:
            self.s0 -= mash(arg)
            if self.s0 < 0:
                self.s0 += 1
            self.s1 -= mash(arg)
            if self.s1 < 0:
                self.s1 += 1
            self.s2 -= mash(arg)
            if self.s2 < 0:
                self.s2 += 1

    def next(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    # random.Random-style alias
    random = next

    def randint(self, upper: int) -> int:
        """Random integer in [0, upper)."""
        return int(self.next() * upper)

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[int(self.next() * len(seq))]


def pick(rng: RandomSource, seq: Sequence[T]) -> T:
    """Uniform pick that works with any ``RandomSource``."""
    if not seq:
        raise IndexError("Cannot choose from an empty sequence")
    return seq[int(rng.next() * len(seq))]


def shuffled(rng: RandomSource, items: Sequence[T]) -> list:
    """
    Return a Fisher-Yates shuffled copy of ``items``.

    Walks from the last index down to 1, swapping with ``floor(r * (i + 1))``,
    so the sequence of draws is fixed for a given input length.
    """
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = int(rng.next() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result

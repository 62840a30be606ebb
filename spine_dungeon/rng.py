"""
Deterministic random numbers for dungeon generation.

Every generation call gets its own SeededRandom, so two dungeons built
from the same seed come out identical and concurrent generations never
share state. Nothing here touches the global `random` module except
generate_random_seed(), which is only used to pick a fresh seed.
"""

import random
import string
from typing import List, MutableSequence, TypeVar, Union

T = TypeVar("T")

Seed = Union[str, int]

SEED_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def _int32(value: int) -> int:
    """Wrap an arbitrary integer to a signed 32-bit value."""
    value &= 0xFFFFFFFF
    if value & 0x80000000:
        return value - 0x100000000
    return value


def fold_seed(seed: Seed) -> int:
    """
    Fold a seed into a signed 32-bit integer.

    Uses the polynomial rolling hash s = s * 31 + ord(ch) over the
    characters of the seed. Integer seeds are hashed via their decimal
    string, so 42 and "42" are the same seed.
    """
    text = str(seed)
    s = 0
    for char in text:
        s = _int32((s << 5) - s + ord(char))
    return s


class SeededRandom:
    """
    Multiply-with-carry generator producing floats in [0, 1).

    Instances are callable: `rng()` returns the next float. The output is
    a pure function of the seed and the number of calls made so far.
    """

    def __init__(self, seed: Seed) -> None:
        self.seed = seed
        folded = fold_seed(seed)
        self._w = _int32(123456789 + folded)
        self._z = _int32(987654321 - folded)

    def __call__(self) -> float:
        return self.random()

    def random(self) -> float:
        self._z = _int32(36969 * (self._z & 0xFFFF) + (self._z >> 16))
        self._w = _int32(18000 * (self._w & 0xFFFF) + (self._w >> 16))
        result = ((self._z << 16) + (self._w & 0xFFFF)) & 0xFFFFFFFF
        return result / 4294967296

    def randint_below(self, n: int) -> int:
        """Returns an integer in [0, n)."""
        if n <= 0:
            raise ValueError(f"randint_below needs a positive bound, got {n}")
        return int(self.random() * n)

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Shuffle in place, walking from the back (Fisher-Yates)."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randint_below(i + 1)
            items[i], items[j] = items[j], items[i]

    def __repr__(self) -> str:
        return f"SeededRandom({self.seed!r})"


def seed_rng(seed: Seed) -> SeededRandom:
    """Create an independent generator for one dungeon generation."""
    return SeededRandom(seed)


def generate_random_seed(length: int = 6) -> str:
    """Pick a fresh alphanumeric seed. Not deterministic."""
    chars: List[str] = [random.choice(SEED_ALPHABET) for _ in range(length)]
    return "".join(chars)

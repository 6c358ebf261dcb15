"""
Random sources for outcome generation

Every source exposes randbelow(n) returning a uniform integer in [0, n).
Production wiring uses default_random_source(), which prefers the OS CSPRNG
and falls back to a seeded Mersenne Twister when the OS cannot supply entropy.
Tests inject SequenceRandomSource for deterministic draws.
"""

import logging
import os
import random
import secrets
from collections.abc import Iterable
from typing import Protocol

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Capability producing uniform integers"""

    name: str

    def randbelow(self, n: int) -> int:
        """Return a uniform integer in [0, n)."""
        ...


class SystemRandomSource:
    """Cryptographically strong source backed by the OS (secrets module)"""

    name = "system"

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"n must be positive, got {n}")
        return secrets.randbelow(n)


class PseudoRandomSource:
    """General-purpose pseudo-random source (seedable)"""

    name = "pseudo"

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"n must be positive, got {n}")
        return self._rng.randrange(n)


class SequenceRandomSource:
    """
    Deterministic source replaying a fixed sequence of draws

    Each value is reduced modulo n so a sequence can be reused across ranges.
    The sequence repeats once exhausted.
    """

    name = "sequence"

    def __init__(self, values: Iterable[int]):
        self._values = list(values)
        if not self._values:
            raise ValueError("SequenceRandomSource needs at least one value")
        self._index = 0
        self.calls: list[int] = []

    def randbelow(self, n: int) -> int:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        self.calls.append(n)
        return value % n


def os_entropy_available() -> bool:
    """Check whether the OS can supply cryptographic randomness"""
    try:
        os.urandom(1)
    except NotImplementedError:
        return False
    return True


def default_random_source(seed: int | None = None) -> RandomSource:
    """
    Pick the strongest available source

    Args:
        seed: If given, a reproducible PseudoRandomSource is returned instead

    Returns:
        SystemRandomSource when OS entropy works, PseudoRandomSource otherwise
    """
    if seed is not None:
        logger.info(f"Using seeded pseudo-random source (seed={seed})")
        return PseudoRandomSource(seed)

    if os_entropy_available():
        return SystemRandomSource()

    logger.warning("OS entropy unavailable, falling back to pseudo-random source")
    return PseudoRandomSource()

"""Random bit and basis sequences for BB84 participants and the channel."""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable
import logging
import operator
import random
import secrets
import threading

import numpy as np

from qkdcomm.errors import InvalidArgumentError, RandomnessSourceError
from qkdcomm.participants import Basis

logger = logging.getLogger(__name__)

# Draw 0 selects the Z basis, draw 1 the X basis.
_BASIS_FOR_DRAW = (Basis.Z, Basis.X)


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can hand out uniformly random bits."""

    def random_bits(self, n: int) -> list[int]:
        ...


class SecureRandomSource:
    """Operating system CSPRNG, read through :mod:`secrets`."""

    def random_bits(self, n: int) -> list[int]:
        try:
            raw = secrets.token_bytes((n + 7) // 8)
        except OSError as exc:
            raise RandomnessSourceError(f"entropy source failed: {exc}") from exc
        bits = np.unpackbits(np.frombuffer(raw, dtype=np.uint8))[:n]
        return [int(b) for b in bits]


class SeededRandomSource:
    """
    Reproducible source backed by :class:`random.Random`.

    Useful for demos and tests. It is NOT cryptographically secure and
    must never back a key that protects real data.
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    def random_bits(self, n: int) -> list[int]:
        with self._lock:
            return [self._rng.getrandbits(1) for _ in range(n)]


def positive_count(n, what: str = "count") -> int:
    """Return ``n`` as a plain int, rejecting bools, non-integers and n <= 0."""
    if isinstance(n, bool):
        raise InvalidArgumentError(f"{what} must be an integer, got {n!r}")
    try:
        n = operator.index(n)
    except TypeError:
        raise InvalidArgumentError(f"{what} must be an integer, got {n!r}") from None
    if n <= 0:
        raise InvalidArgumentError(f"{what} must be greater than zero, got {n}")
    return n


class SequenceKind(Enum):
    BITS = "bits"
    BASES = "bases"


class RandomSequenceGenerator:
    """
    Produces independent, uniformly distributed bits or bases.

    Args:
        source: Where random bits come from. Defaults to the OS CSPRNG.
    """

    def __init__(self, source: RandomSource | None = None):
        self.source = source if source is not None else SecureRandomSource()

    def generate(self, n: int, kind: SequenceKind) -> list[int] | list[Basis]:
        """
        Draw ``n`` values of the requested kind.

        Raises:
            InvalidArgumentError: If ``n`` is not a positive integer.
            RandomnessSourceError: If the source fails or misbehaves.
        """
        n = positive_count(n)
        draws = self.source.random_bits(n)
        if len(draws) != n:
            raise RandomnessSourceError(
                f"source returned {len(draws)} values, expected {n}"
            )
        if any(d not in (0, 1) for d in draws):
            raise RandomnessSourceError("source returned values outside {0, 1}")

        logger.debug("Drew %d random %s", n, kind.value)
        if kind is SequenceKind.BASES:
            return [_BASIS_FOR_DRAW[d] for d in draws]
        return [int(d) for d in draws]

    def bits(self, n: int) -> list[int]:
        return self.generate(n, SequenceKind.BITS)

    def bases(self, n: int) -> list[Basis]:
        return self.generate(n, SequenceKind.BASES)

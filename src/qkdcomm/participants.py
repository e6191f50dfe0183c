"""Participants in the BB84 protocol: Alice and Bob."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from qkdcomm.errors import PreconditionError

if TYPE_CHECKING:
    from qkdcomm.randomness import RandomSequenceGenerator


class Basis(Enum):
    """Measurement basis for BB84 protocol."""
    Z = "Z"  # Rectilinear basis: |0⟩, |1⟩
    X = "X"  # Diagonal basis: |+⟩, |−⟩


class ParticipantState(Enum):
    EMPTY = "empty"
    POPULATED = "populated"


@dataclass
class Participant:
    """
    A party in the BB84 exchange.

    The sender (Alice) holds random bits and the bases she encoded them in;
    the receiver (Bob) only needs the bases he measures in. A participant is
    empty until :meth:`populate` runs, and reading its sequences before that
    raises :class:`PreconditionError`.
    """
    name: str

    _bits: list[int] | None = field(default=None, init=False, repr=False)
    _bases: list[Basis] | None = field(default=None, init=False, repr=False)

    @property
    def state(self) -> ParticipantState:
        if self._bases is None:
            return ParticipantState.EMPTY
        return ParticipantState.POPULATED

    @property
    def bits(self) -> list[int]:
        if self._bits is None:
            raise PreconditionError(f"{self.name} holds no bits")
        return list(self._bits)

    @property
    def bases(self) -> list[Basis]:
        if self._bases is None:
            raise PreconditionError(f"{self.name} has not chosen bases")
        return list(self._bases)

    @property
    def has_bits(self) -> bool:
        return self._bits is not None

    @property
    def size(self) -> int:
        return len(self.bases)

    def populate(
        self,
        n: int,
        generator: RandomSequenceGenerator,
        with_bits: bool = True
    ) -> None:
        """
        Draw a fresh random sequence of length ``n``.

        Any previous draw is discarded. Both draws complete before the
        participant changes, so a failing generator leaves it untouched.

        Args:
            n: Number of positions
            generator: Source of random bits and bases
            with_bits: Draw bits as well as bases (the sender needs both)
        """
        bits = generator.bits(n) if with_bits else None
        bases = generator.bases(n)
        self._bits = bits
        self._bases = bases

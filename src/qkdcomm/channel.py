"""Classical simulation of the BB84 quantum channel and key sifting."""

from __future__ import annotations

import logging

from qkdcomm.errors import PreconditionError
from qkdcomm.participants import Basis, Participant
from qkdcomm.randomness import RandomSequenceGenerator

logger = logging.getLogger(__name__)


def matching_indices(alice_bases: list[Basis], bob_bases: list[Basis]) -> list[int]:
    """Indices where both parties used the same basis, ascending."""
    if len(alice_bases) != len(bob_bases):
        raise PreconditionError(
            f"basis sequences differ in length: {len(alice_bases)} != {len(bob_bases)}"
        )
    return [i for i, (a, b) in enumerate(zip(alice_bases, bob_bases)) if a == b]


def sift_key(
    alice_bases: list[Basis],
    bob_bases: list[Basis],
    transmitted_bits: list[int]
) -> list[int]:
    """
    Sift the key by keeping only bits where bases matched.

    Public basis reconciliation: the parties compare bases over an
    (assumed authentic) classical channel and discard every position where
    they disagree.

    Args:
        alice_bases: The bases Alice encoded in
        bob_bases: The bases Bob measured in
        transmitted_bits: Bob's measurement outcomes

    Returns:
        Sifted key, in ascending index order
    """
    if len(transmitted_bits) != len(alice_bases):
        raise PreconditionError(
            f"expected {len(alice_bases)} transmitted bits, got {len(transmitted_bits)}"
        )
    return [transmitted_bits[i] for i in matching_indices(alice_bases, bob_bases)]


class QuantumChannel:
    """
    Observable statistics of qubit transmission.

    When Bob measures in Alice's basis he reads her bit exactly; otherwise
    the outcome is a fair coin, independent of what she sent. Polarization
    physics, noise and eavesdropping are not modelled.
    """

    def __init__(self, generator: RandomSequenceGenerator | None = None):
        self.generator = generator if generator is not None else RandomSequenceGenerator()
        self.transmitted_bits: list[int] = []

    def transmit(self, alice: Participant, bob: Participant) -> list[int]:
        """
        Send Alice's qubits to Bob and record what he measures.

        Neither participant is modified.

        Returns:
            Bob's outcome for every position
        """
        if not alice.has_bits:
            raise PreconditionError(f"{alice.name} has no bits to send")
        bits = alice.bits
        a_bases = alice.bases
        b_bases = bob.bases
        if len(bits) != len(b_bases):
            raise PreconditionError(
                f"{alice.name} sends {len(bits)} qubits but {bob.name} "
                f"measures {len(b_bases)}"
            )

        outcomes = list(bits)
        mismatched = [i for i, (a, b) in enumerate(zip(a_bases, b_bases)) if a != b]
        if mismatched:
            coin_flips = self.generator.bits(len(mismatched))
            for i, flip in zip(mismatched, coin_flips):
                outcomes[i] = flip

        logger.debug(
            "Transmitted %d qubits, %d measured in the wrong basis",
            len(outcomes), len(mismatched)
        )
        self.transmitted_bits = outcomes
        return list(outcomes)

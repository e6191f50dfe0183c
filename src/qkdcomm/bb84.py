"""BB84 Quantum Key Distribution Protocol implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

from qkdcomm.analysis import key_to_hex, sifting_efficiency
from qkdcomm.channel import QuantumChannel, matching_indices, sift_key
from qkdcomm.errors import InvalidArgumentError, PreconditionError
from qkdcomm.participants import Basis, Participant
from qkdcomm.randomness import RandomSequenceGenerator, RandomSource, positive_count
from qkdcomm.secure import SecureCommunication

logger = logging.getLogger(__name__)


@dataclass
class BB84Result:
    """Results from a BB84 protocol run."""
    shared_key: list[int]

    # Statistics
    initial_bits: int
    sifted_key_length: int
    sifting_efficiency: float

    # Detailed data
    alice_bits: list[int] = field(default_factory=list)
    alice_bases: list[Basis] = field(default_factory=list)
    bob_bases: list[Basis] = field(default_factory=list)
    transmitted_bits: list[int] = field(default_factory=list)
    matching_indices: list[int] = field(default_factory=list)

    def __str__(self) -> str:
        key_hex = key_to_hex(self.shared_key)
        if len(key_hex) > 32:
            key_hex = key_hex[:32] + "..."
        return (
            f"BB84 Protocol Results\n"
            f"{'='*50}\n"
            f"Initial bits transmitted: {self.initial_bits}\n"
            f"Sifted key length: {self.sifted_key_length}\n"
            f"Sifting efficiency: {self.sifting_efficiency:.1%}\n"
            f"{'='*50}\n"
            f"Shared key (hex): {key_hex or '-'}"
        )


@dataclass
class BB84Protocol:
    """
    BB84 Quantum Key Distribution Protocol.

    Orchestrates a run between Alice and Bob and keys a
    :class:`SecureCommunication` with the sifted result.

    Example:
        >>> protocol = BB84Protocol(num_bits=128)
        >>> result = protocol.run()
        >>> message = protocol.secure_comm.encrypt("Hello, Bob!", "Alice")
        >>> protocol.secure_comm.decrypt(message)
        'Hello, Bob!'

    Pass ``source=SeededRandomSource(seed)`` for reproducible runs.
    """
    num_bits: int
    source: RandomSource | None = None

    _alice: Participant | None = field(default=None, init=False, repr=False)
    _bob: Participant | None = field(default=None, init=False, repr=False)
    _channel: QuantumChannel | None = field(default=None, init=False, repr=False)
    _shared_key: list[int] | None = field(default=None, init=False, repr=False)
    _secure_comm: SecureCommunication | None = field(default=None, init=False, repr=False)
    _result: BB84Result | None = field(default=None, init=False, repr=False)

    def __post_init__(self):
        self.num_bits = positive_count(self.num_bits, "num_bits")

    def run(self) -> BB84Result:
        """
        Run the BB84 protocol.

        Every step works on fresh objects that replace the coordinator's
        state only once the whole run has succeeded. A failure leaves the
        previous run (or the unrun coordinator) intact.

        Returns:
            BB84Result with all protocol data
        """
        n = positive_count(self.num_bits, "num_bits")
        generator = RandomSequenceGenerator(self.source)
        logger.info("Starting BB84 with %d bits", n)

        # Step 1: Alice draws bits and bases, Bob draws bases
        alice = Participant("Alice")
        bob = Participant("Bob")
        alice.populate(n, generator, with_bits=True)
        bob.populate(n, generator, with_bits=False)

        # Step 2: Quantum transmission
        channel = QuantumChannel(generator)
        transmitted = channel.transmit(alice, bob)

        # Step 3: Basis reconciliation (sifting)
        matches = matching_indices(alice.bases, bob.bases)
        shared_key = sift_key(alice.bases, bob.bases, transmitted)
        logger.debug("Matching bases: %d/%d", len(matches), n)

        # Step 4: Key the secure channel
        secure_comm = SecureCommunication()
        secure_comm.initialize(shared_key)

        result = BB84Result(
            shared_key=list(shared_key),
            initial_bits=n,
            sifted_key_length=len(shared_key),
            sifting_efficiency=sifting_efficiency(len(shared_key), n),
            alice_bits=alice.bits,
            alice_bases=alice.bases,
            bob_bases=bob.bases,
            transmitted_bits=list(transmitted),
            matching_indices=matches,
        )

        self._alice = alice
        self._bob = bob
        self._channel = channel
        self._shared_key = shared_key
        self._secure_comm = secure_comm
        self._result = result

        logger.info("BB84 complete: %d-bit shared key from %d qubits", len(shared_key), n)
        return result

    @property
    def has_run(self) -> bool:
        return self._result is not None

    @property
    def shared_key(self) -> list[int]:
        """The sifted key; its length is the number of basis agreements."""
        self._require_run()
        return list(self._shared_key)

    @property
    def secure_comm(self) -> SecureCommunication:
        self._require_run()
        return self._secure_comm

    @property
    def alice(self) -> Participant:
        self._require_run()
        return self._alice

    @property
    def bob(self) -> Participant:
        self._require_run()
        return self._bob

    @property
    def channel(self) -> QuantumChannel:
        self._require_run()
        return self._channel

    @property
    def result(self) -> BB84Result:
        self._require_run()
        return self._result

    def _require_run(self) -> None:
        if self._result is None:
            raise PreconditionError("protocol has not been run")

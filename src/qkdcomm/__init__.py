"""BB84 quantum key distribution simulation with a key-driven message channel."""

__version__ = "0.1.0"

from qkdcomm.bb84 import BB84Protocol, BB84Result
from qkdcomm.channel import QuantumChannel, sift_key
from qkdcomm.errors import (
    QKDError,
    InvalidArgumentError,
    RandomnessSourceError,
    PreconditionError,
    MalformedCiphertextError,
)
from qkdcomm.participants import Basis, Participant, ParticipantState
from qkdcomm.randomness import (
    RandomSequenceGenerator,
    RandomSource,
    SecureRandomSource,
    SeededRandomSource,
    SequenceKind,
)
from qkdcomm.secure import Message, SecureCommunication

__all__ = [
    "BB84Protocol",
    "BB84Result",
    "QuantumChannel",
    "sift_key",
    "QKDError",
    "InvalidArgumentError",
    "RandomnessSourceError",
    "PreconditionError",
    "MalformedCiphertextError",
    "Basis",
    "Participant",
    "ParticipantState",
    "RandomSequenceGenerator",
    "RandomSource",
    "SecureRandomSource",
    "SeededRandomSource",
    "SequenceKind",
    "Message",
    "SecureCommunication",
]

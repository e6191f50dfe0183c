"""Exceptions raised by the BB84 simulation and the secure channel."""


class QKDError(Exception):
    """Base class for all qkdcomm errors."""


class InvalidArgumentError(QKDError, ValueError):
    """A caller passed an out-of-range argument (e.g. a non-positive bit count)."""


class RandomnessSourceError(QKDError):
    """The entropy source could not satisfy a request."""


class PreconditionError(QKDError):
    """An operation was used before its setup step ran."""


class MalformedCiphertextError(QKDError, ValueError):
    """A ciphertext could not be decoded from its text encoding."""

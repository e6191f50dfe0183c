"""
Symmetric message encryption keyed by the sifted BB84 key.

The packed key is XORed against the message bytes and repeated
cyclically when the message is longer than the key. That makes this a
repeating-key XOR cipher, not a one-time pad: it is here to show how a
distributed key gets used and is not suitable for real confidentiality.
Ciphertexts carry no authentication, so decrypting with the wrong key
returns garbage instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass
import base64
import binascii
import logging

import numpy as np

from qkdcomm.analysis import key_to_bytes
from qkdcomm.errors import MalformedCiphertextError, PreconditionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Message:
    """An encrypted message as it travels between the parties."""
    ciphertext: str
    sender: str


def xor_with_keystream(data: bytes, keystream: bytes) -> bytes:
    """XOR ``data`` against ``keystream`` repeated to the same length."""
    if not data:
        return b""
    if not keystream:
        raise PreconditionError("cannot XOR against an empty keystream")
    payload = np.frombuffer(data, dtype=np.uint8)
    # np.resize repeats its input cyclically
    stream = np.resize(np.frombuffer(keystream, dtype=np.uint8), payload.shape)
    return np.bitwise_xor(payload, stream).tobytes()


class SecureCommunication:
    """
    Encrypts and decrypts text with a shared key.

    Starts uninitialized; :meth:`initialize` installs the key and clears the
    message log. Encrypting or decrypting before that raises
    :class:`PreconditionError`.
    """

    def __init__(self, shared_key: list[int] | None = None):
        self._shared_key: tuple[int, ...] | None = None
        self._keystream: bytes | None = None
        self._messages: list[Message] = []
        if shared_key is not None:
            self.initialize(shared_key)

    def initialize(self, shared_key: list[int]) -> None:
        """Install ``shared_key`` and start a fresh message log."""
        self._shared_key = tuple(shared_key)
        self._keystream = key_to_bytes(list(shared_key))
        self._messages = []
        logger.debug("Secure channel keyed with %d bits", len(self._shared_key))

    @property
    def is_ready(self) -> bool:
        return self._keystream is not None

    @property
    def shared_key(self) -> list[int]:
        self._require_ready()
        return list(self._shared_key)

    @property
    def key_bytes(self) -> bytes:
        return self._require_ready()

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def encrypt(self, plaintext: str, sender: str) -> Message:
        """
        Encrypt ``plaintext`` and log the resulting message.

        Args:
            plaintext: Text to protect
            sender: Label of the party sending it

        Returns:
            Message holding the base64 ciphertext
        """
        keystream = self._require_ready()
        cipher_bytes = xor_with_keystream(plaintext.encode("utf-8"), keystream)
        message = Message(
            ciphertext=base64.b64encode(cipher_bytes).decode("ascii"),
            sender=sender,
        )
        self._messages.append(message)
        return message

    def decrypt(self, message: Message) -> str:
        """
        Recover the plaintext of ``message``.

        Line breaks inside the base64 text are ignored; any other character
        outside the base64 alphabet is rejected.

        Raises:
            MalformedCiphertextError: If the ciphertext is not valid base64.
        """
        keystream = self._require_ready()
        encoded = message.ciphertext.replace("\r", "").replace("\n", "")
        try:
            cipher_bytes = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise MalformedCiphertextError(
                f"failed to decode ciphertext from {message.sender}: {exc}"
            ) from exc
        plain_bytes = xor_with_keystream(cipher_bytes, keystream)
        return plain_bytes.decode("utf-8", errors="replace")

    def _require_ready(self) -> bytes:
        if self._keystream is None:
            raise PreconditionError("secure channel has not been initialized")
        return self._keystream

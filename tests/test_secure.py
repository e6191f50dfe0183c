"""Tests for the key-driven message channel."""

import pytest

from qkdcomm import (
    MalformedCiphertextError,
    Message,
    PreconditionError,
    SecureCommunication,
)
from qkdcomm.analysis import key_to_bytes, key_to_hex, sifting_efficiency
from qkdcomm.secure import xor_with_keystream


class TestKeyPacking:
    """Tests for bit-to-byte conversion."""

    def test_full_byte(self):
        assert key_to_bytes([1, 0, 1, 0, 1, 0, 1, 0]) == b"\xaa"

    def test_partial_byte_padded_low(self):
        """A trailing partial byte is zero-padded on its low-order bits."""
        assert key_to_bytes([1, 1]) == b"\xc0"
        assert key_to_bytes([1, 0, 1, 0, 1, 0, 1, 0, 1]) == b"\xaa\x80"

    def test_empty_key(self):
        assert key_to_bytes([]) == b""

    def test_hex(self):
        assert key_to_hex([1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 1]) == "f010"

    def test_sifting_efficiency(self):
        assert sifting_efficiency(50, 100) == 0.5
        assert sifting_efficiency(0, 0) == 0.0


class TestXor:
    """Tests for the repeating-key XOR."""

    def test_key_wraps(self):
        """A short keystream repeats across a longer payload."""
        assert xor_with_keystream(b"\x00\x00\x00\x00\x00", b"\x01\x02") == b"\x01\x02\x01\x02\x01"

    def test_empty_payload(self):
        assert xor_with_keystream(b"", b"") == b""

    def test_empty_keystream(self):
        with pytest.raises(PreconditionError):
            xor_with_keystream(b"abc", b"")


class TestSecureCommunication:
    """Tests for SecureCommunication."""

    @pytest.mark.parametrize("plaintext", [
        "Hello, Bob!",
        "",
        "Grüße aus Ljubljana ✓",
        "A much longer message that runs well past the three bytes of packed key material.",
    ])
    def test_round_trip(self, secure_comm, plaintext):
        message = secure_comm.encrypt(plaintext, "Alice")
        assert secure_comm.decrypt(message) == plaintext

    def test_ciphertext_is_base64(self, secure_comm):
        message = secure_comm.encrypt("Hello, Bob!", "Alice")
        assert message.ciphertext
        assert message.ciphertext != "Hello, Bob!"
        assert len(message.ciphertext) % 4 == 0

    def test_single_bit_key(self):
        secure_comm = SecureCommunication([1])
        assert secure_comm.key_bytes == b"\x80"
        message = secure_comm.encrypt("ping", "Bob")
        assert secure_comm.decrypt(message) == "ping"

    def test_message_log(self, secure_comm):
        first = secure_comm.encrypt("one", "Alice")
        second = secure_comm.encrypt("two", "Bob")
        assert secure_comm.messages == (first, second)

        secure_comm.initialize([0, 1, 1])
        assert secure_comm.messages == ()

    def test_message_is_frozen(self, secure_comm):
        message = secure_comm.encrypt("one", "Alice")
        with pytest.raises(AttributeError):
            message.sender = "Eve"

    def test_uninitialized(self):
        secure_comm = SecureCommunication()
        assert not secure_comm.is_ready
        with pytest.raises(PreconditionError):
            secure_comm.encrypt("Hello", "Alice")
        with pytest.raises(PreconditionError):
            secure_comm.decrypt(Message(ciphertext="AAAA", sender="Alice"))

    def test_empty_key(self):
        """An empty key cannot encrypt anything but the empty string."""
        secure_comm = SecureCommunication([])
        assert secure_comm.encrypt("", "Alice").ciphertext == ""
        with pytest.raises(PreconditionError):
            secure_comm.encrypt("Hello", "Alice")

    def test_line_breaks_ignored(self, secure_comm):
        """Base64 wrapped over several lines still decodes."""
        message = secure_comm.encrypt("A message long enough to wrap its base64 text.", "Alice")
        wrapped = Message(
            ciphertext="\r\n".join(
                message.ciphertext[i:i + 16] for i in range(0, len(message.ciphertext), 16)
            ),
            sender="Alice",
        )
        assert "\n" in wrapped.ciphertext
        assert secure_comm.decrypt(wrapped) == "A message long enough to wrap its base64 text."

    @pytest.mark.parametrize("ciphertext", ["not base64!", "abc", "é"])
    def test_malformed_ciphertext(self, secure_comm, ciphertext):
        with pytest.raises(MalformedCiphertextError):
            secure_comm.decrypt(Message(ciphertext=ciphertext, sender="Eve"))

    def test_wrong_key_gives_garbage(self):
        """An unauthenticated cipher decrypts with any key and never raises."""
        message = SecureCommunication([1, 1]).encrypt("Hi", "Alice")
        recovered = SecureCommunication([0] * 8).decrypt(message)
        assert recovered != "Hi"

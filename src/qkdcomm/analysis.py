"""Key conversion and reporting helpers."""

import numpy as np


def key_to_bytes(key: list[int]) -> bytes:
    """
    Convert a bit list to bytes.

    Bits are packed most significant first, eight per byte. A trailing
    partial byte is zero-padded on its low-order bits, so ``[1, 1]``
    becomes ``b"\\xc0"``.

    Args:
        key: List of bits (0s and 1s)

    Returns:
        Bytes representation of the key
    """
    if not key:
        return b""
    return np.packbits(np.asarray(key, dtype=np.uint8)).tobytes()


def key_to_hex(key: list[int]) -> str:
    """Convert a bit list to a hexadecimal string."""
    return key_to_bytes(key).hex()


def sifting_efficiency(sifted_length: int, initial_bits: int) -> float:
    """Fraction of transmitted qubits that survived sifting (about 0.5 on average)."""
    return sifted_length / initial_bits if initial_bits > 0 else 0.0

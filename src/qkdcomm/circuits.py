"""Render the qubit preparation behind a BB84 run as a cirq circuit."""

import cirq

from qkdcomm.errors import InvalidArgumentError
from qkdcomm.participants import Basis


def encode_qubit(bit: int, basis: Basis, qubit: cirq.LineQubit) -> cirq.Circuit:
    """
    Prepare a single bit in the given basis.

    Encoding scheme:
    - Z-basis: |0⟩ for 0, |1⟩ for 1
    - X-basis: |+⟩ for 0, |−⟩ for 1
    """
    circuit = cirq.Circuit()
    if bit == 1:
        circuit.append(cirq.X(qubit))
    if basis == Basis.X:
        circuit.append(cirq.H(qubit))
    return circuit


def encoding_circuit(bits: list[int], bases: list[Basis]) -> cirq.Circuit:
    """
    Build one circuit preparing every qubit Alice sends, one line per position.

    For display only; the protocol itself never simulates these circuits.
    """
    if len(bits) != len(bases):
        raise InvalidArgumentError(
            f"got {len(bits)} bits but {len(bases)} bases"
        )
    circuit = cirq.Circuit()
    for i, (bit, basis) in enumerate(zip(bits, bases)):
        circuit += encode_qubit(bit, basis, cirq.LineQubit(i))
    return circuit

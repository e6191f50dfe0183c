#!/usr/bin/env python3
"""
BB84 Key Distribution Demo

Runs the BB84 protocol, keys a secure channel with the sifted result,
then encrypts and decrypts a message with it.

Usage:
    python demo.py [options]

Options:
    --bits <n>        Qubits to transmit (default: 128)
    --message <text>  Message to encrypt (default: "Hello, ANOPHEL!")
    --sender <name>   Sender label (default: "Alice")
    --seed <n>        Reproducible run; uses an insecure seeded source
    --circuit         Print the preparation circuit for the first qubits
    -v, --verbose     Log every protocol step
"""

import argparse
import logging
import sys

from qkdcomm import BB84Protocol, QKDError, SeededRandomSource
from qkdcomm.analysis import key_to_hex

CIRCUIT_PREVIEW = 8


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="BB84 key distribution demo")
    parser.add_argument("--bits", type=int, default=128, help="qubits to transmit")
    parser.add_argument("--message", default="Hello, ANOPHEL!", help="message to encrypt")
    parser.add_argument("--sender", default="Alice", help="sender label")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for a reproducible (insecure) run")
    parser.add_argument("--circuit", action="store_true",
                        help="print the preparation circuit of the first qubits")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def demo_bb84(args) -> None:
    """Run the protocol and push one message through the keyed channel."""
    source = SeededRandomSource(args.seed) if args.seed is not None else None
    protocol = BB84Protocol(num_bits=args.bits, source=source)
    result = protocol.run()
    print(result)

    print(f"\nAlice's first 20 bases: {[b.value for b in result.alice_bases[:20]]}")
    print(f"Bob's first 20 bases:   {[b.value for b in result.bob_bases[:20]]}")
    matches = [
        "✓" if a == b else "✗"
        for a, b in zip(result.alice_bases[:20], result.bob_bases[:20])
    ]
    print(f"Basis match:            {matches}")
    print(f"Key bytes (hex):        {key_to_hex(protocol.shared_key)}")

    if args.circuit:
        from qkdcomm.circuits import encoding_circuit

        print("\n" + "=" * 60)
        print(f"PREPARATION CIRCUIT (first {CIRCUIT_PREVIEW} qubits)")
        print("=" * 60)
        print(encoding_circuit(
            result.alice_bits[:CIRCUIT_PREVIEW],
            result.alice_bases[:CIRCUIT_PREVIEW]
        ))

    secure_comm = protocol.secure_comm
    message = secure_comm.encrypt(args.message, args.sender)
    print(f"\nEncrypted Message: {message}")
    print(f"Decrypted Message: {secure_comm.decrypt(message)}")


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        demo_bb84(args)
    except QKDError as exc:
        print(f"Error running BB84: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

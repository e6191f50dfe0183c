"""Pytest fixtures for qkdcomm tests."""

import pytest

from qkdcomm import (
    BB84Protocol,
    Participant,
    RandomSequenceGenerator,
    RandomnessSourceError,
    SecureCommunication,
    SeededRandomSource,
)


class ScriptedSource:
    """Random source that replays a fixed list of bits, in order."""

    def __init__(self, script):
        self.script = list(script)

    def random_bits(self, n):
        if n > len(self.script):
            raise RandomnessSourceError("scripted source exhausted")
        drawn, self.script = self.script[:n], self.script[n:]
        return drawn


class FailingSource:
    """Random source whose entropy is never available."""

    def random_bits(self, n):
        raise RandomnessSourceError("entropy pool unavailable")


# Alice bits [1,0,1,1], Alice bases [Z,X,Z,Z], Bob bases [Z,Z,Z,X],
# then Bob's coin flips for the two mismatched positions (1 and 3).
SCENARIO_SCRIPT = [1, 0, 1, 1, 0, 1, 0, 0, 0, 0, 0, 1, 0, 1]


@pytest.fixture
def scripted_source():
    """Factory for sources that replay a fixed list of bits."""
    return ScriptedSource


@pytest.fixture
def failing_source():
    """A source that always fails."""
    return FailingSource()


@pytest.fixture
def scenario_script():
    """Draws for the scripted four-qubit run."""
    return list(SCENARIO_SCRIPT)


@pytest.fixture
def scenario_protocol():
    """A 4-qubit protocol whose every random draw is fixed."""
    return BB84Protocol(num_bits=4, source=ScriptedSource(SCENARIO_SCRIPT))


@pytest.fixture
def protocol():
    """Create a BB84 protocol with fixed seed."""
    return BB84Protocol(num_bits=128, source=SeededRandomSource(42))


@pytest.fixture
def generator():
    """Seeded sequence generator."""
    return RandomSequenceGenerator(SeededRandomSource(7))


@pytest.fixture
def alice(generator):
    """Alice with 50 bits and bases."""
    participant = Participant("Alice")
    participant.populate(50, generator)
    return participant


@pytest.fixture
def bob(generator):
    """Bob with 50 bases."""
    participant = Participant("Bob")
    participant.populate(50, generator, with_bits=False)
    return participant


@pytest.fixture
def secure_comm():
    """Secure channel keyed with 20 bits."""
    return SecureCommunication([1, 0, 1, 1, 0, 0, 1, 0, 1, 1, 1, 0, 0, 1, 0, 1, 0, 0, 1, 1])

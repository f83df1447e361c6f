"""Shared pytest fixtures for the handshake test suite."""

import random

import pytest

from elgamal_handshake import ElGamalExchange


@pytest.fixture()
def rng():
    """Seeded generator so failures reproduce."""
    return random.Random(20241019)


@pytest.fixture()
def engine(rng):
    """Small engine that keeps the suite fast."""
    return ElGamalExchange(key_size=8, rng=rng)

import dataclasses
import random

import pytest

from elgamal_handshake import (
    CoprimeSearchExhausted,
    ElGamalExchange,
    Handshake,
    InvalidRangeError,
    PrivateKey,
    PublicKey,
)
from elgamal_handshake.number_theory import gcd


def test_engine_precomputes_bounds_and_factor_base(engine):
    assert engine.lower_bound == 2**7
    assert engine.upper_bound == 2**15
    assert len(engine.factor_base) == 16
    assert engine.factor_base[:5] == (2, 3, 5, 7, 11)
    assert engine.factor_base[-1] == 53


def test_fifty_handshakes_with_8_bit_keys(engine):
    public_key, private_key = engine.generate_keys()

    assert 2**7 <= public_key.q < 2**15
    assert 2 <= public_key.g < public_key.q
    assert gcd(private_key.k, public_key.q) == 1
    assert private_key.q == public_key.q
    assert public_key.h == pow(public_key.g, private_key.k, public_key.q)

    for _ in range(50):
        client_secret, cipher = engine.client_side(public_key)
        assert engine.server_side(private_key, cipher) == client_secret


@pytest.mark.parametrize("key_size", [2, 3, 16, 64, 128])
def test_handshake_holds_for_every_trial(key_size):
    engine = ElGamalExchange(key_size=key_size, rng=random.Random(key_size))
    for _ in range(10):
        public_key, private_key = engine.generate_keys()
        assert engine.lower_bound <= public_key.q < engine.upper_bound
        handshake = engine.client_side(public_key)
        assert engine.server_side(private_key, handshake.cipher) == handshake.shared_secret


def test_client_values_match_direct_computation(engine):
    public_key, _ = engine.generate_keys()
    state = engine.rng.getstate()
    k = engine.find_coprime(public_key.q)
    engine.rng.setstate(state)

    handshake = engine.client_side(public_key)
    assert handshake.shared_secret == pow(public_key.h, k, public_key.q)
    assert handshake.cipher == pow(public_key.g, k, public_key.q)


def test_handshake_unpacks_like_a_pair():
    handshake = Handshake(shared_secret=4, cipher=9)
    secret, cipher = handshake
    assert (secret, cipher) == (4, 9)


def test_keys_are_immutable(engine):
    public_key, private_key = engine.generate_keys()
    with pytest.raises(dataclasses.FrozenInstanceError):
        public_key.h = 1
    with pytest.raises(dataclasses.FrozenInstanceError):
        private_key.k = 1


def test_server_side_with_hand_built_keys(engine):
    # q = 1019, g = 2, k = 5, client exponent 7
    public_key = PublicKey(q=1019, g=2, h=pow(2, 5, 1019))
    private_key = PrivateKey(k=5, q=1019)
    cipher = pow(2, 7, 1019)
    assert engine.server_side(private_key, cipher) == pow(public_key.h, 7, 1019)


def test_find_coprime_range_and_coprimality(engine):
    for a in (129, 210, 30030, 2**15 - 1):
        for _ in range(50):
            c = engine.find_coprime(a)
            assert engine.lower_bound <= c < a
            assert gcd(c, a) == 1


class ZeroBytes(random.Random):
    def randbytes(self, n):
        return bytes(n)


def test_find_coprime_gives_up_after_cap():
    # Zero bytes always sample the lower bound, 128, which shares 2 with 130
    engine = ElGamalExchange(key_size=8, rng=ZeroBytes(), max_coprime_attempts=25)
    with pytest.raises(CoprimeSearchExhausted) as excinfo:
        engine.find_coprime(130)
    assert excinfo.value.attempts == 25
    assert excinfo.value.modulus == 130


def test_find_coprime_needs_room_above_lower_bound(engine):
    with pytest.raises(InvalidRangeError):
        engine.find_coprime(engine.lower_bound)


def test_seeded_engines_are_reproducible():
    a = ElGamalExchange(key_size=32, rng=random.Random(99))
    b = ElGamalExchange(key_size=32, rng=random.Random(99))
    assert a.generate_keys() == b.generate_keys()


def test_default_engine_uses_system_randomness():
    engine = ElGamalExchange(key_size=16)
    public_key, private_key = engine.generate_keys()
    secret, cipher = engine.client_side(public_key)
    assert engine.server_side(private_key, cipher) == secret


@pytest.mark.parametrize("kwargs", [
    {"key_size": 1}, {"key_size": 0}, {"key_size": 8, "max_coprime_attempts": 0},
])
def test_invalid_configuration_rejected(kwargs):
    with pytest.raises(ValueError):
        ElGamalExchange(**kwargs)


def test_verbose_engine_traces_steps(capsys, rng):
    engine = ElGamalExchange(key_size=8, rng=rng, verbose=True)
    public_key, private_key = engine.generate_keys()
    _, cipher = engine.client_side(public_key)
    engine.server_side(private_key, cipher)

    out = capsys.readouterr().out
    for tag in ("[Setup]", "[KeyGen]", "[Client]", "[Server]"):
        assert tag in out


def test_quiet_engine_prints_nothing(capsys, engine):
    engine.generate_keys()
    assert capsys.readouterr().out == ""

from dataclasses import dataclass
from typing import Optional, Tuple
import random
import secrets

from ..errors import CoprimeSearchExhausted
from ..number_theory import factor_base_array, factor_base_power, gcd, int_power
from ..primes import generate_primes
from ..sampling import random_range


@dataclass(frozen=True)
class PublicKey:
    """Public half of a keypair, safe to hand to any client"""
    q: int  # Modulus, drawn from [lower_bound, upper_bound)
    g: int  # Generator, 2 <= g < q
    h: int  # g^k mod q


@dataclass(frozen=True)
class PrivateKey:
    """Secret exponent with a copy of the modulus it belongs to"""
    k: int
    q: int


@dataclass(frozen=True)
class Handshake:
    """Client output: the shared secret and the value sent to the server"""
    shared_secret: int
    cipher: int

    def __iter__(self):
        return iter((self.shared_secret, self.cipher))


class ElGamalExchange:
    def __init__(self, key_size: int = 2048, rng: Optional[random.Random] = None,
                 max_coprime_attempts: int = 10_000, verbose: bool = False):
        """Precompute the factor base and sampling bounds for one key size."""
        if key_size < 2:
            raise ValueError("Key size must be at least 2 bits")
        if max_coprime_attempts < 1:
            raise ValueError("max_coprime_attempts must be positive")

        self.key_size = key_size
        self.max_coprime_attempts = max_coprime_attempts
        self.verbose = verbose
        self.rng = rng if rng is not None else secrets.SystemRandom()

        self.lower_bound = int_power(2, key_size - 1)
        self.upper_bound = int_power(2, 2 * key_size - 1)
        self.factor_base: Tuple[int, ...] = tuple(generate_primes(2 * key_size))
        self._factor_base_array = factor_base_array(self.factor_base)

        self._trace("Setup", f"Key size: {key_size} bits")
        self._trace("Setup", f"Sampling bounds: [2^{key_size - 1}, 2^{2 * key_size - 1})")
        self._trace("Setup", f"Factor base: {len(self.factor_base)} primes, "
                             f"largest {self.factor_base[-1]}")

    def _trace(self, tag: str, message: str) -> None:
        if self.verbose:
            print(f"[{tag}] {message}")

    def power(self, base: int, exponent: int, modulus: int) -> int:
        """base^exponent mod modulus using this engine's factor base."""
        return factor_base_power(base, exponent, modulus, self._factor_base_array)

    def find_coprime(self, a: int) -> int:
        """Sample from [lower_bound, a) until the candidate is coprime to a."""
        for attempt in range(1, self.max_coprime_attempts + 1):
            candidate = random_range(self.rng, self.lower_bound, a)
            if gcd(candidate, a) == 1:
                self._trace("Coprime", f"Found coprime after {attempt} attempt(s)")
                return candidate
        raise CoprimeSearchExhausted(a, self.max_coprime_attempts)

    def generate_keys(self) -> Tuple[PublicKey, PrivateKey]:
        """Generate a fresh keypair."""
        # Keep q above lower_bound so the coprime search range is never empty
        q = random_range(self.rng, self.lower_bound + 1, self.upper_bound)
        g = random_range(self.rng, 2, q)
        k = self.find_coprime(q)
        h = self.power(g, k, q)

        self._trace("KeyGen", f"q = {hex(q)}")
        self._trace("KeyGen", f"g = {hex(g)}")
        self._trace("KeyGen", f"h = g^k mod q = {hex(h)}")
        return PublicKey(q=q, g=g, h=h), PrivateKey(k=k, q=q)

    def client_side(self, public_key: PublicKey) -> Handshake:
        """Derive a shared secret and the cipher the server needs to recover it."""
        k = self.find_coprime(public_key.q)
        shared_secret = self.power(public_key.h, k, public_key.q)
        cipher = self.power(public_key.g, k, public_key.q)

        self._trace("Client", f"cipher = g^k mod q = {hex(cipher)}")
        return Handshake(shared_secret=shared_secret, cipher=cipher)

    def server_side(self, private_key: PrivateKey, cipher: int) -> int:
        """Recover the client's shared secret from the cipher."""
        shared_secret = self.power(cipher, private_key.k, private_key.q)
        self._trace("Server", f"shared secret = {hex(shared_secret)}")
        return shared_secret

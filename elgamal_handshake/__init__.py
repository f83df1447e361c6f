"""ElGamal-style Diffie-Hellman handshake over arbitrary-precision integers."""

from .encryption import ElGamalExchange, Handshake, PrivateKey, PublicKey
from .errors import (
    CoprimeSearchExhausted,
    ElGamalError,
    FactorBaseError,
    InvalidRangeError,
)

__version__ = "0.1.0"

__all__ = [
    "ElGamalExchange",
    "Handshake",
    "PrivateKey",
    "PublicKey",
    "ElGamalError",
    "InvalidRangeError",
    "CoprimeSearchExhausted",
    "FactorBaseError",
]

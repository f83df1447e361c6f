class ElGamalError(Exception):
    """Base class for errors raised by the handshake engine."""


class InvalidRangeError(ElGamalError, ValueError):
    """Raised when a sampling range is empty or inverted."""


class CoprimeSearchExhausted(ElGamalError, RuntimeError):
    """Raised when no coprime candidate was found within the attempt cap."""

    def __init__(self, modulus: int, attempts: int):
        self.modulus = modulus
        self.attempts = attempts
        super().__init__(f"No value coprime to {modulus} found in {attempts} attempts")


class FactorBaseError(ElGamalError, ArithmeticError):
    """Raised when a factor-base prime does not divide the running exponent."""

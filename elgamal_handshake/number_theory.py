from typing import Sequence, Union

import numpy as np

from .errors import FactorBaseError


def gcd(a: int, b: int) -> int:
    """Euclidean greatest common divisor of two non-negative integers."""
    if a < 0 or b < 0:
        raise ValueError("gcd is defined here for non-negative integers only")

    while a != 0 and b != 0:
        if a > b:
            a %= b
        else:
            b %= a
    return b if a == 0 else a


def int_power(base: int, exponent: int) -> int:
    """Square-and-multiply without reduction."""
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")

    result = 1
    while exponent > 0:
        if exponent % 2 == 0:
            base *= base
            exponent >>= 1
        else:
            result *= base
            exponent -= 1
    return result


def modular_power(base: int, exponent: int, modulus: int) -> int:
    """Square-and-multiply computation of base^exponent mod modulus."""
    _check_operands(exponent, modulus)

    result = 1
    while exponent > 0:
        if exponent % 2 == 0:
            base = (base * base) % modulus
            exponent >>= 1
        else:
            result = (result * base) % modulus
            exponent -= 1
    return result % modulus


def factor_base_array(factor_base: Sequence[int]) -> np.ndarray:
    """Pack a factor base into an object array so divisibility tests stay exact."""
    return np.array(list(factor_base), dtype=object)


def dividing_factors(exponent: int, factor_base: np.ndarray) -> list:
    """Primes of the factor base dividing exponent, in factor-base order."""
    if factor_base.size == 0:
        return []
    mask = (exponent % factor_base) == 0
    return factor_base[mask.astype(bool)].tolist()


def factor_base_power(base: int, exponent: int, modulus: int,
                      factor_base: Union[np.ndarray, Sequence[int]]) -> int:
    """
    Compute base^exponent mod modulus by dividing small primes out of the exponent.

    Each pass raises the running base to every factor-base prime that divides
    the current exponent and divides the exponent by it, then multiplies the
    running base into the result and decrements the exponent by one. The
    invariant result * base^exponent (mod modulus) holds across every step.
    Exponents with no small factors fall back to one decrement per pass.
    """
    _check_operands(exponent, modulus)
    if not isinstance(factor_base, np.ndarray):
        factor_base = factor_base_array(factor_base)

    result = 1
    base %= modulus
    while exponent > 0:
        for p in dividing_factors(exponent, factor_base):
            quotient, remainder = divmod(exponent, p)
            if remainder:
                raise FactorBaseError(f"{p} does not divide exponent {exponent}")
            base = modular_power(base, p, modulus)
            exponent = quotient
        result = (result * base) % modulus
        exponent -= 1
    return result % modulus


def _check_operands(exponent: int, modulus: int) -> None:
    if modulus <= 0:
        raise ValueError("Modulus must be positive")
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")

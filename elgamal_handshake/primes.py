from typing import List


def generate_primes(count: int) -> List[int]:
    """Return the first `count` primes in ascending order using trial division."""
    if count < 0:
        raise ValueError("Prime count must be non-negative")

    primes: List[int] = []
    candidate = 2
    while len(primes) < count:
        # Divisible by an earlier prime means composite
        if all(candidate % p != 0 for p in primes):
            primes.append(candidate)
        candidate += 1
    return primes

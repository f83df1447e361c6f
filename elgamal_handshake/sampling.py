import random

from .errors import InvalidRangeError


def byte_count(value: int) -> int:
    """Number of bytes in the signed two's-complement form of value."""
    if value == 0:
        return 1
    if value > 0:
        return (value.bit_length() + 8) // 8
    return ((~value).bit_length() + 8) // 8


def random_range(rng: random.Random, minimum: int, maximum: int) -> int:
    """
    Draw an integer x with minimum <= x < maximum.

    One byte more than the range needs is drawn so the sign bit of the
    signed reading does not bias the result before reduction.
    """
    if maximum <= minimum:
        raise InvalidRangeError(f"Empty range [{minimum}, {maximum})")

    span = maximum - minimum
    raw = rng.randbytes(byte_count(span) + 1)
    value = abs(int.from_bytes(raw, byteorder='little', signed=True))
    return value % span + minimum

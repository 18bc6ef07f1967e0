"""Trusted-dealer preprocessing: random authenticated bits and AND tuples.

Field elements of GF(2^k) are plain integers below ``2**k``; addition is XOR.
Randomness here is not meant for production use.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

DEFAULT_FIELD_BITS = 256


def _check_bit(bit: int) -> int:
    if bit not in (0, 1):
        raise ValueError(f"expected a bit, got {bit!r}")
    return bit


def _random_bit() -> int:
    return random.getrandbits(1)


def random_field_element(num_bits: int = DEFAULT_FIELD_BITS) -> int:
    """Return a uniformly random element of GF(2^num_bits)."""
    if num_bits < 1:
        raise ValueError("num_bits must be positive")
    return random.getrandbits(num_bits)


def generate_delta(num_bits: int = DEFAULT_FIELD_BITS) -> int:
    """Return a random global key ``delta``."""
    return random_field_element(num_bits)


@dataclass
class AuthenticatedBits:
    """Random bits with MACs and keys satisfying ``key = mac + bit * delta``."""

    bits: list[int]
    macs: list[int]
    keys: list[int]


@dataclass
class AndTuples:
    """``kappa`` repetitions of shared AND triples: ``(a) & (b) == c`` across parties."""

    pa_a: list[list[int]]
    pa_b: list[list[int]]
    pa_c: list[list[int]]
    pb_a: list[list[int]]
    pb_b: list[list[int]]
    pb_c: list[list[int]]


@dataclass
class AuthenticatedAndTuple:
    """Output shares of one authenticated AND, with MACs and keys for each party."""

    pa_output_bit: int
    pa_mac: int
    pa_key: int
    pb_output_bit: int
    pb_mac: int
    pb_key: int


def generate_random_tuples(length: int, delta: int,
                           num_bits: int = DEFAULT_FIELD_BITS) -> AuthenticatedBits:
    """Generate ``length`` random bits authenticated under ``delta``."""
    if length < 0:
        raise ValueError("length must be non-negative")
    bits = [_random_bit() for _ in range(length)]
    macs = [random_field_element(num_bits) for _ in range(length)]
    keys = [mac ^ (delta if bit else 0) for bit, mac in zip(bits, macs)]
    return AuthenticatedBits(bits, macs, keys)


def generate_random_and_tuples(kappa: int, length: int) -> AndTuples:
    """Generate ``kappa`` repetitions of ``length`` shared random AND triples."""
    if kappa < 0 or length < 0:
        raise ValueError("kappa and length must be non-negative")
    tuples = AndTuples([], [], [], [], [], [])
    for _ in range(kappa):
        rows: list[list[int]] = [[], [], [], [], [], []]
        for _ in range(length):
            pa_a, pa_b, pa_c, pb_a, pb_b = (_random_bit() for _ in range(5))
            pb_c = ((pa_a ^ pb_a) & (pa_b ^ pb_b)) ^ pa_c
            for row, value in zip(rows, (pa_a, pa_b, pa_c, pb_a, pb_b, pb_c)):
                row.append(value)
        for target, row in zip(
            (tuples.pa_a, tuples.pa_b, tuples.pa_c, tuples.pb_a, tuples.pb_b, tuples.pb_c), rows
        ):
            target.append(row)
    return tuples


def generate_random_authenticated_and_tuple(
    delta_a: int, pa_left: int, pa_right: int,
    delta_b: int, pb_left: int, pb_right: int,
    num_bits: int = DEFAULT_FIELD_BITS,
) -> AuthenticatedAndTuple:
    """Share the AND of the two shared input bits, authenticated across parties.

    Party A's output is authenticated under ``delta_b`` and party B's under ``delta_a``.
    """
    pa_left, pa_right, pb_left, pb_right = map(_check_bit, (pa_left, pa_right, pb_left, pb_right))
    pa_out = _random_bit()
    pb_out = ((pa_left ^ pb_left) & (pa_right ^ pb_right)) ^ pa_out
    pa_mac = random_field_element(num_bits)
    pb_mac = random_field_element(num_bits)
    return AuthenticatedAndTuple(
        pa_output_bit=pa_out,
        pa_mac=pa_mac,
        pa_key=pa_mac ^ (delta_b if pa_out else 0),
        pb_output_bit=pb_out,
        pb_mac=pb_mac,
        pb_key=pb_mac ^ (delta_a if pb_out else 0),
    )
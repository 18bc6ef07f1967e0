"""Checking AND relations on VOLE-in-the-head authenticated bits.

Each party masks its shares of ``x`` and ``y`` with shares of a random AND
triple ``(a, b, c)`` and publishes the masked bits ``d = x + a`` and
``e = y + b`` together with their MACs. With the public sums of ``d`` and
``e`` it then publishes ``tilde_z = z + c + b * d + a * e``. The verifier
recomputes the matching keys and checks ``key = mac + bit * nabla`` for every
published value.

Bits are ints 0/1; field elements are ints, with addition as XOR. A ``*_reps``
argument holds one list per repetition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

Bits = Sequence[int]
Values = Sequence[int]
BitReps = Sequence[Bits]
ValueReps = Sequence[Values]
Published = tuple[list[list[int]], list[list[int]]]


class VoleCorrelationError(ValueError):
    """Raised when published bits and MACs do not match the verifier's keys."""


@dataclass(frozen=True)
class CheckAndTranscript:
    """What both parties publish in the AND check.

    Each side is ``((d_bit_reps, d_mac_reps), (e_bit_reps, e_mac_reps),
    (tilde_z_bit_reps, tilde_z_mac_reps))``.
    """

    pa_published: tuple[Published, Published, Published]
    pb_published: tuple[Published, Published, Published]


def _add(left: Sequence[int], right: Sequence[int]) -> list[int]:
    if len(left) != len(right):
        raise ValueError(f"vector lengths differ: {len(left)} and {len(right)}")
    return [u ^ v for u, v in zip(left, right)]


def _select(values: Sequence[int], bits: Bits) -> list[int]:
    """Multiply each value by the matching bit."""
    if len(values) != len(bits):
        raise ValueError(f"vector lengths differ: {len(values)} and {len(bits)}")
    return [value if bit else 0 for value, bit in zip(values, bits)]


def _check_reps(kappa: int, **reps: Sequence) -> None:
    if kappa < 0:
        raise ValueError("kappa must be non-negative")
    for name, value in reps.items():
        if len(value) < kappa:
            raise ValueError(f"{name} holds {len(value)} repetitions, need {kappa}")


def verify_vole_correlations(bits: Bits, macs: Values, nabla: int, keys: Values) -> None:
    """Check ``key = mac + bit * nabla`` entry by entry."""
    if not len(bits) == len(macs) == len(keys):
        raise VoleCorrelationError(
            f"lengths differ: {len(bits)} bits, {len(macs)} MACs, {len(keys)} keys"
        )
    for index, (bit, mac, key) in enumerate(zip(bits, macs, keys)):
        if key != mac ^ (nabla if bit else 0):
            raise VoleCorrelationError(f"VOLE correlation fails at position {index}")


def compute_masked_bits_and_macs(
    kappa: int,
    x_bits: Bits, x_mac_reps: ValueReps,
    y_bits: Bits, y_mac_reps: ValueReps,
    a_bit_reps: BitReps, a_mac_reps: ValueReps,
    b_bit_reps: BitReps, b_mac_reps: ValueReps,
) -> tuple[Published, Published]:
    """Return ``((d_bit_reps, d_mac_reps), (e_bit_reps, e_mac_reps))``."""
    _check_reps(kappa, x_mac_reps=x_mac_reps, y_mac_reps=y_mac_reps,
                a_bit_reps=a_bit_reps, a_mac_reps=a_mac_reps,
                b_bit_reps=b_bit_reps, b_mac_reps=b_mac_reps)
    d_bits, d_macs, e_bits, e_macs = [], [], [], []
    for rep in range(kappa):
        d_bits.append(_add(x_bits, a_bit_reps[rep]))
        e_bits.append(_add(y_bits, b_bit_reps[rep]))
        d_macs.append(_add(x_mac_reps[rep], a_mac_reps[rep]))
        e_macs.append(_add(y_mac_reps[rep], b_mac_reps[rep]))
    return (d_bits, d_macs), (e_bits, e_macs)


def _cross_term(z: Sequence[int], c: Sequence[int], b: Sequence[int], d_sum: Bits,
                a: Sequence[int], e_sum: Bits) -> list[int]:
    return _add(_add(_add(z, c), _select(b, d_sum)), _select(a, e_sum))


def compute_masked_cross_bits_and_macs(
    kappa: int,
    d_sum_reps: BitReps, e_sum_reps: BitReps,
    z_bits: Bits, z_mac_reps: ValueReps,
    a_bit_reps: BitReps, a_mac_reps: ValueReps,
    b_bit_reps: BitReps, b_mac_reps: ValueReps,
    c_bit_reps: BitReps, c_mac_reps: ValueReps,
) -> Published:
    """Return ``(tilde_z_bit_reps, tilde_z_mac_reps)``."""
    _check_reps(kappa, d_sum_reps=d_sum_reps, e_sum_reps=e_sum_reps,
                z_mac_reps=z_mac_reps, a_bit_reps=a_bit_reps, a_mac_reps=a_mac_reps,
                b_bit_reps=b_bit_reps, b_mac_reps=b_mac_reps,
                c_bit_reps=c_bit_reps, c_mac_reps=c_mac_reps)
    bit_reps, mac_reps = [], []
    for rep in range(kappa):
        d_sum, e_sum = d_sum_reps[rep], e_sum_reps[rep]
        bit_reps.append(_cross_term(z_bits, c_bit_reps[rep], b_bit_reps[rep], d_sum,
                                    a_bit_reps[rep], e_sum))
        mac_reps.append(_cross_term(z_mac_reps[rep], c_mac_reps[rep], b_mac_reps[rep], d_sum,
                                    a_mac_reps[rep], e_sum))
    return bit_reps, mac_reps


def _verify_party(kappa: int, published, keys, nabla_reps: Values,
                  d_sum_reps: list[list[int]], e_sum_reps: list[list[int]]) -> None:
    (d_bits, d_macs), (e_bits, e_macs), (tz_bits, tz_macs) = published
    (x_keys, y_keys, z_keys), (a_keys, b_keys, c_keys) = keys
    _check_reps(kappa, d_bits=d_bits, d_macs=d_macs, e_bits=e_bits, e_macs=e_macs,
                tilde_z_bits=tz_bits, tilde_z_macs=tz_macs, nabla_reps=nabla_reps,
                x_keys=x_keys, y_keys=y_keys, z_keys=z_keys,
                a_keys=a_keys, b_keys=b_keys, c_keys=c_keys)
    for rep in range(kappa):
        nabla = nabla_reps[rep]
        verify_vole_correlations(d_bits[rep], d_macs[rep], nabla,
                                 _add(x_keys[rep], a_keys[rep]))
        verify_vole_correlations(e_bits[rep], e_macs[rep], nabla,
                                 _add(y_keys[rep], b_keys[rep]))
        tilde_z_keys = _cross_term(z_keys[rep], c_keys[rep], b_keys[rep], d_sum_reps[rep],
                                   a_keys[rep], e_sum_reps[rep])
        verify_vole_correlations(tz_bits[rep], tz_macs[rep], nabla, tilde_z_keys)


def verify(kappa: int, transcript: CheckAndTranscript,
           nabla_a_reps: Values, nabla_b_reps: Values, pa_keys, pb_keys) -> None:
    """Verify a transcript of the AND check.

    ``pa_keys`` and ``pb_keys`` are ``((x_key_reps, y_key_reps, z_key_reps),
    (a_key_reps, b_key_reps, c_key_reps))``. Party A's values are checked under
    ``nabla_b_reps`` and party B's under ``nabla_a_reps``. Raises
    :class:`VoleCorrelationError` on the first mismatch.
    """
    (pa_d, _), (pa_e, _), _ = transcript.pa_published
    (pb_d, _), (pb_e, _), _ = transcript.pb_published
    _check_reps(kappa, pa_d=pa_d, pa_e=pa_e, pb_d=pb_d, pb_e=pb_e)
    d_sum_reps = [_add(pa_d[rep], pb_d[rep]) for rep in range(kappa)]
    e_sum_reps = [_add(pa_e[rep], pb_e[rep]) for rep in range(kappa)]
    _verify_party(kappa, transcript.pa_published, pa_keys, nabla_b_reps, d_sum_reps, e_sum_reps)
    _verify_party(kappa, transcript.pb_published, pb_keys, nabla_a_reps, d_sum_reps, e_sum_reps)
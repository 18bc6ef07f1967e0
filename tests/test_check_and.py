import copy
import random

import pytest

from pagc.check_and import (
    CheckAndTranscript,
    VoleCorrelationError,
    compute_masked_bits_and_macs,
    compute_masked_cross_bits_and_macs,
    verify,
    verify_vole_correlations,
)

KAPPA = 10
SIZE = 64


def _bits(rng, n):
    return [rng.getrandbits(1) for _ in range(n)]


def _bit_reps(rng):
    return [_bits(rng, SIZE) for _ in range(KAPPA)]


def _gf_reps(rng):
    return [[rng.randrange(256) for _ in range(SIZE)] for _ in range(KAPPA)]


def _keys(bits, macs, nabla):
    return [mac ^ (nabla if bit else 0) for bit, mac in zip(bits, macs)]


def _key_reps_fixed(bits, mac_reps, nablas):
    return [_keys(bits, macs, nabla) for macs, nabla in zip(mac_reps, nablas)]


def _key_reps(bit_reps, mac_reps, nablas):
    return [_keys(b, m, n) for b, m, n in zip(bit_reps, mac_reps, nablas)]


def _and_shares(pa_x, pa_y, pa_z, pb_x, pb_y):
    return [((ax ^ bx) & (ay ^ by)) ^ az for ax, ay, az, bx, by in zip(pa_x, pa_y, pa_z, pb_x, pb_y)]


def _run(seed=1):
    rng = random.Random(seed)
    nabla_a = [rng.randrange(1, 256) for _ in range(KAPPA)]
    nabla_b = [rng.randrange(1, 256) for _ in range(KAPPA)]

    pa = {"x": _bits(rng, SIZE), "y": _bits(rng, SIZE), "z": _bits(rng, SIZE)}
    pa.update(a=_bit_reps(rng), b=_bit_reps(rng), c=_bit_reps(rng))
    pb = {"x": _bits(rng, SIZE), "y": _bits(rng, SIZE)}
    pb["z"] = _and_shares(pa["x"], pa["y"], pa["z"], pb["x"], pb["y"])
    pb.update(a=_bit_reps(rng), b=_bit_reps(rng))
    pb["c"] = [_and_shares(*cols) for cols in zip(pa["a"], pa["b"], pa["c"], pb["a"], pb["b"])]

    macs = {party: {k: _gf_reps(rng) for k in "xyzabc"} for party in ("pa", "pb")}
    keys = {}
    for party, values, nablas in (("pa", pa, nabla_b), ("pb", pb, nabla_a)):
        m = macs[party]
        keys[party] = (
            tuple(_key_reps_fixed(values[k], m[k], nablas) for k in "xyz"),
            tuple(_key_reps(values[k], m[k], nablas) for k in "abc"),
        )
        for k in "xyz":
            for rep in range(KAPPA):
                verify_vole_correlations(values[k], m[k][rep], nablas[rep], keys[party][0]["xyz".index(k)][rep])

    masked = {}
    for party, values in (("pa", pa), ("pb", pb)):
        m = macs[party]
        masked[party] = compute_masked_bits_and_macs(
            KAPPA, values["x"], m["x"], values["y"], m["y"],
            values["a"], m["a"], values["b"], m["b"],
        )
    d_sum = [[u ^ v for u, v in zip(p, q)] for p, q in zip(masked["pa"][0][0], masked["pb"][0][0])]
    e_sum = [[u ^ v for u, v in zip(p, q)] for p, q in zip(masked["pa"][1][0], masked["pb"][1][0])]

    cross = {}
    for party, values in (("pa", pa), ("pb", pb)):
        m = macs[party]
        cross[party] = compute_masked_cross_bits_and_macs(
            KAPPA, d_sum, e_sum, values["z"], m["z"],
            values["a"], m["a"], values["b"], m["b"], values["c"], m["c"],
        )
    transcript = CheckAndTranscript(
        (masked["pa"][0], masked["pa"][1], cross["pa"]),
        (masked["pb"][0], masked["pb"][1], cross["pb"]),
    )
    return transcript, nabla_a, nabla_b, keys, d_sum, e_sum, pa, pb


def test_verify_vole_correlations_accepts_pinned_values():
    verify_vole_correlations([0, 1, 1], [5, 7, 0], 3, [5, 4, 3])
    with pytest.raises(VoleCorrelationError):
        verify_vole_correlations([0, 1, 1], [5, 7, 0], 3, [5, 4, 2])


def test_verify_vole_correlations_rejects_length_mismatch():
    with pytest.raises(VoleCorrelationError):
        verify_vole_correlations([0, 1], [5, 7, 0], 3, [5, 4, 3])


def test_masked_bits_are_sums():
    rng = random.Random(3)
    x, y = _bits(rng, SIZE), _bits(rng, SIZE)
    a, b = _bit_reps(rng), _bit_reps(rng)
    xm, ym, am, bm = _gf_reps(rng), _gf_reps(rng), _gf_reps(rng), _gf_reps(rng)
    (d, dm), (e, em) = compute_masked_bits_and_macs(KAPPA, x, xm, y, ym, a, am, b, bm)
    assert len(d) == len(dm) == len(e) == len(em) == KAPPA
    for rep in range(KAPPA):
        assert [u ^ v for u, v in zip(d[rep], a[rep])] == x
        assert [u ^ v for u, v in zip(e[rep], b[rep])] == y
        assert [u ^ v for u, v in zip(dm[rep], am[rep])] == xm[rep]


def test_check_and_honest_run_verifies():
    transcript, nabla_a, nabla_b, keys, *_ = _run()
    verify(KAPPA, transcript, nabla_a, nabla_b, keys["pa"], keys["pb"])
    with pytest.raises(VoleCorrelationError):
        verify(KAPPA, transcript, nabla_b, nabla_a, keys["pa"], keys["pb"])


def test_check_and_triples_are_consistent():
    _, _, _, _, _, _, pa, pb = _run()
    for ax, ay, az, bx, by, bz in zip(pa["x"], pa["y"], pa["z"], pb["x"], pb["y"], pb["z"]):
        assert (ax ^ bx) & (ay ^ by) == az ^ bz


def test_tilde_z_shares_sum_to_d_times_e():
    transcript, _, _, _, d_sum, e_sum, _, _ = _run(seed=7)
    pa_tz = transcript.pa_published[2][0]
    pb_tz = transcript.pb_published[2][0]
    for rep in range(KAPPA):
        total = [u ^ v for u, v in zip(pa_tz[rep], pb_tz[rep])]
        assert total == [d & e for d, e in zip(d_sum[rep], e_sum[rep])]


@pytest.mark.parametrize("party, item", [("pa", 0), ("pa", 2), ("pb", 1), ("pb", 2)])
def test_tampered_bit_is_rejected(party, item):
    transcript, nabla_a, nabla_b, keys, *_ = _run(seed=11)
    pa_pub = copy.deepcopy(transcript.pa_published)
    pb_pub = copy.deepcopy(transcript.pb_published)
    target = pa_pub if party == "pa" else pb_pub
    target[item][0][4][9] ^= 1
    tampered = CheckAndTranscript(pa_pub, pb_pub)
    with pytest.raises(VoleCorrelationError):
        verify(KAPPA, tampered, nabla_a, nabla_b, keys["pa"], keys["pb"])


def test_tampered_mac_is_rejected():
    transcript, nabla_a, nabla_b, keys, *_ = _run(seed=5)
    pb_pub = copy.deepcopy(transcript.pb_published)
    pb_pub[2][1][0][0] ^= 0x10
    with pytest.raises(VoleCorrelationError):
        verify(KAPPA, CheckAndTranscript(transcript.pa_published, pb_pub),
               nabla_a, nabla_b, keys["pa"], keys["pb"])


def test_too_few_repetitions_raises():
    rng = random.Random(2)
    x = _bits(rng, SIZE)
    with pytest.raises(ValueError):
        compute_masked_bits_and_macs(
            KAPPA + 1, x, _gf_reps(rng), x, _gf_reps(rng),
            _bit_reps(rng), _gf_reps(rng), _bit_reps(rng), _gf_reps(rng),
        )
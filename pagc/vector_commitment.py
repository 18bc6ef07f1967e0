"""All-but-one vector commitment built on a GGM tree.

It yields VOLE-in-the-head correlations over GF(2^8): the prover learns bits
and MACs, and the verifier, given the challenge ``nabla``, learns keys with
``key = mac + bit * nabla``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .hashing import hash_all_coms
from .prg import BitAndComGenerator, OneToTwoPRG

_MAX_TAU = 8


@dataclass(frozen=True)
class VCParameters:
    """Public parameters: tree depth ``tau``, vector length ``big_n`` and the PRG."""

    tau: int
    big_n: int
    prg: OneToTwoPRG

    def __post_init__(self) -> None:
        if not 0 <= self.tau <= _MAX_TAU:
            raise ValueError(f"tau must lie in [0, {_MAX_TAU}], got {self.tau}")
        if self.big_n < 1:
            raise ValueError("big_n must be positive")

    @property
    def num_leaves(self) -> int:
        return 1 << self.tau

    @property
    def tree_len(self) -> int:
        return (self.num_leaves << 1) - 1

    @property
    def first_leaf_index(self) -> int:
        return self.num_leaves - 1


def _check_nabla(params: VCParameters, nabla: int) -> int:
    if not 0 <= nabla < params.num_leaves:
        raise ValueError(f"nabla must lie in [0, {params.num_leaves}), got {nabla}")
    return nabla


class VectorCommitmentProver:
    """Prover side: commits to all leaves and opens all but one."""

    def __init__(self, params: VCParameters) -> None:
        self.params = params
        self._tree: list[bytes] | None = None
        self._coms: list[bytes] | None = None

    def commit(self, seed: bytes) -> tuple[bytes, list[int], list[int]]:
        """Commit from a secret tree seed.

        Returns the hash of all leaf commitments, the bit vector and the MAC vector.
        """
        params = self.params
        tree = params.prg.generate_ggm_tree(seed, params.tau)
        generator = BitAndComGenerator(params.prg)
        leaves = [generator.generate(leaf, params.big_n) for leaf in tree[params.first_leaf_index:]]

        bits = [0] * params.big_n
        macs = [0] * params.big_n
        for leaf_index, (leaf_bits, _) in enumerate(leaves):
            for j, bit in enumerate(leaf_bits):
                if bit:
                    bits[j] ^= 1
                    macs[j] ^= leaf_index

        self._tree = tree
        self._coms = [com for _, com in leaves]
        return hash_all_coms(self._coms), bits, macs

    def open(self, nabla: int) -> tuple[bytes, list[bytes]]:
        """Open every leaf except the one at index ``nabla``.

        Returns the commitment of the hidden leaf and the sibling seeds on its path,
        from the leaf level upwards.
        """
        if self._tree is None or self._coms is None:
            raise RuntimeError("commit must be called before open")
        excluded = _check_nabla(self.params, nabla)
        index_in_tree = self.params.first_leaf_index + excluded
        trace = []
        for level in range(self.params.tau):
            is_right_child = (excluded >> level) & 1
            sibling = index_in_tree - 1 if is_right_child else index_in_tree + 1
            trace.append(self._tree[sibling])
            index_in_tree = (index_in_tree - 1) >> 1
        return self._coms[excluded], trace


def reconstruct(
    params: VCParameters, nabla: int, decommitment: tuple[bytes, Sequence[bytes]]
) -> tuple[bytes, list[int]]:
    """Rebuild the commitment hash and the verifier keys from an opening."""
    excluded = _check_nabla(params, nabla)
    com_at_excluded, trace = decommitment
    if len(trace) != params.tau:
        raise ValueError(f"seed trace must hold {params.tau} seeds, got {len(trace)}")

    generator = BitAndComGenerator(params.prg)
    coms: list[bytes] = [b""] * params.num_leaves
    leaf_bits: list[list[int] | None] = [None] * params.num_leaves
    coms[excluded] = bytes(com_at_excluded)

    for level, seed in enumerate(trace):
        sibling = (excluded >> level) ^ 1
        first = sibling << level
        subtree = params.prg.generate_ggm_tree(seed, level)
        subtree_leaves = subtree[(1 << level) - 1:]
        for j, leaf in enumerate(subtree_leaves, start=first):
            leaf_bits[j], coms[j] = generator.generate(leaf, params.big_n)

    com_hash = hash_all_coms(coms)

    keys = [0] * params.big_n
    for leaf_index, bits in enumerate(leaf_bits):
        if leaf_index == excluded or bits is None:
            continue
        shifted = nabla ^ leaf_index
        for j, bit in enumerate(bits):
            if bit:
                keys[j] ^= shifted
    return com_hash, keys
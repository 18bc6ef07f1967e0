"""AES-based length-doubling PRG, GGM trees and bit/commitment expansion."""

from __future__ import annotations

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

SEED_BYTE_LEN = 16


def _check_seed(seed: bytes, what: str = "seed") -> bytes:
    seed = bytes(seed)
    if len(seed) != SEED_BYTE_LEN:
        raise ValueError(f"{what} must be {SEED_BYTE_LEN} bytes, got {len(seed)}")
    return seed


def _aes_ecb(key: bytes):
    return Cipher(algorithms.AES(key), modes.ECB()).encryptor()


class OneToTwoPRG:
    """Expands a 16-byte seed into two 16-byte seeds with two derived AES keys."""

    def __init__(self, key: bytes) -> None:
        master = _aes_ecb(_check_seed(key, "key"))
        self._left = _aes_ecb(master.update(b"\xff" * SEED_BYTE_LEN))
        self._right = _aes_ecb(master.update(b"\xfe" * SEED_BYTE_LEN))

    def generate_double(self, seed: bytes) -> tuple[bytes, bytes]:
        """Return the left and right children of ``seed``."""
        seed = _check_seed(seed)
        return self._left.update(seed), self._right.update(seed)

    def generate_ggm_tree(self, seed: bytes, depth: int) -> list[bytes]:
        """Return the GGM tree of the given depth as a flat heap-ordered list.

        Node ``i`` has children ``2i + 1`` and ``2i + 2``; depth 0 is the root alone.
        """
        if depth < 0:
            raise ValueError("depth must be non-negative")
        tree = [_check_seed(seed)]
        for i in range((1 << depth) - 1):
            tree.extend(self.generate_double(tree[i]))
        return tree


class BitAndComGenerator:
    """Derives a pseudo-random bit vector and a commitment from a leaf seed."""

    def __init__(self, prg: OneToTwoPRG) -> None:
        self._prg = prg

    def generate(self, seed: bytes, length: int) -> tuple[list[int], bytes]:
        """Return ``length`` bits and the commitment for ``seed``."""
        if length < 1:
            raise ValueError("length must be positive")
        bit_seed, com = self._prg.generate_double(seed)
        bits: list[int] = []
        while len(bits) < length:
            block, bit_seed = self._prg.generate_double(bit_seed)
            bits.extend(byte & 1 for byte in block)
        return bits[:length], com
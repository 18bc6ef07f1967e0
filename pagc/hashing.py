"""BLAKE3 hashing and the hash-based helpers used by the protocols."""

from __future__ import annotations

import itertools
import struct
from dataclasses import dataclass
from typing import Iterable, Sequence

BLAKE3_HASH_DIGEST_NUM_BYTES = 32

_IV = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)
_MSG_PERMUTATION = (2, 6, 3, 10, 7, 0, 4, 13, 1, 11, 12, 5, 9, 14, 15, 8)
_CHUNK_START = 1
_CHUNK_END = 2
_PARENT = 4
_ROOT = 8
_BLOCK_LEN = 64
_CHUNK_LEN = 1024
_MASK = 0xFFFFFFFF


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK


def _g(state: list[int], a: int, b: int, c: int, d: int, mx: int, my: int) -> None:
    state[a] = (state[a] + state[b] + mx) & _MASK
    state[d] = _rotr(state[d] ^ state[a], 16)
    state[c] = (state[c] + state[d]) & _MASK
    state[b] = _rotr(state[b] ^ state[c], 12)
    state[a] = (state[a] + state[b] + my) & _MASK
    state[d] = _rotr(state[d] ^ state[a], 8)
    state[c] = (state[c] + state[d]) & _MASK
    state[b] = _rotr(state[b] ^ state[c], 7)


def _round(state: list[int], m: Sequence[int]) -> None:
    _g(state, 0, 4, 8, 12, m[0], m[1])
    _g(state, 1, 5, 9, 13, m[2], m[3])
    _g(state, 2, 6, 10, 14, m[4], m[5])
    _g(state, 3, 7, 11, 15, m[6], m[7])
    _g(state, 0, 5, 10, 15, m[8], m[9])
    _g(state, 1, 6, 11, 12, m[10], m[11])
    _g(state, 2, 7, 8, 13, m[12], m[13])
    _g(state, 3, 4, 9, 14, m[14], m[15])


def _compress(cv: Sequence[int], block_words: Sequence[int], counter: int,
              block_len: int, flags: int) -> list[int]:
    state = [*cv, *_IV[:4], counter & _MASK, (counter >> 32) & _MASK, block_len, flags]
    m = list(block_words)
    for round_index in range(7):
        _round(state, m)
        if round_index < 6:
            m = [m[i] for i in _MSG_PERMUTATION]
    for i in range(8):
        state[i] ^= state[i + 8]
        state[i + 8] ^= cv[i]
    return state


def _words(block: bytes | bytearray) -> tuple[int, ...]:
    return struct.unpack("<16I", bytes(block).ljust(_BLOCK_LEN, b"\0"))


@dataclass(frozen=True)
class _Output:
    input_cv: tuple[int, ...]
    block_words: tuple[int, ...]
    counter: int
    block_len: int
    flags: int

    def chaining_value(self) -> tuple[int, ...]:
        return tuple(_compress(self.input_cv, self.block_words, self.counter,
                               self.block_len, self.flags)[:8])

    def root_bytes(self, length: int) -> bytes:
        out = bytearray()
        for block_counter in itertools.count():
            if len(out) >= length:
                break
            words = _compress(self.input_cv, self.block_words, block_counter,
                              self.block_len, self.flags | _ROOT)
            out += struct.pack("<16I", *words)
        return bytes(out[:length])


def _parent_output(left: tuple[int, ...], right: tuple[int, ...],
                   key: tuple[int, ...], flags: int) -> _Output:
    return _Output(key, left + right, 0, _BLOCK_LEN, _PARENT | flags)


class _ChunkState:
    def __init__(self, key: tuple[int, ...], chunk_counter: int, flags: int) -> None:
        self.cv = key
        self.chunk_counter = chunk_counter
        self.flags = flags
        self.block = bytearray()
        self.blocks_compressed = 0

    def __len__(self) -> int:
        return _BLOCK_LEN * self.blocks_compressed + len(self.block)

    def _start_flag(self) -> int:
        return _CHUNK_START if self.blocks_compressed == 0 else 0

    def update(self, data: memoryview) -> None:
        while data:
            if len(self.block) == _BLOCK_LEN:
                self.cv = tuple(_compress(self.cv, _words(self.block), self.chunk_counter,
                                          _BLOCK_LEN, self.flags | self._start_flag())[:8])
                self.blocks_compressed += 1
                self.block = bytearray()
            take = min(_BLOCK_LEN - len(self.block), len(data))
            self.block += data[:take]
            data = data[take:]

    def output(self) -> _Output:
        return _Output(self.cv, _words(self.block), self.chunk_counter, len(self.block),
                       self.flags | self._start_flag() | _CHUNK_END)


class Blake3:
    """Incremental BLAKE3 hasher with extendable output."""

    def __init__(self, data: bytes = b"") -> None:
        self._key = _IV
        self._flags = 0
        self._chunk = _ChunkState(self._key, 0, self._flags)
        self._cv_stack: list[tuple[int, ...]] = []
        if data:
            self.update(data)

    def _push_chunk_cv(self, cv: tuple[int, ...], total_chunks: int) -> None:
        while total_chunks & 1 == 0:
            cv = _parent_output(self._cv_stack.pop(), cv, self._key, self._flags).chaining_value()
            total_chunks >>= 1
        self._cv_stack.append(cv)

    def update(self, data: bytes) -> None:
        """Absorb more input."""
        view = memoryview(bytes(data))
        while view:
            if len(self._chunk) == _CHUNK_LEN:
                cv = self._chunk.output().chaining_value()
                total_chunks = self._chunk.chunk_counter + 1
                self._push_chunk_cv(cv, total_chunks)
                self._chunk = _ChunkState(self._key, total_chunks, self._flags)
            take = min(_CHUNK_LEN - len(self._chunk), len(view))
            self._chunk.update(view[:take])
            view = view[take:]

    def digest(self, length: int = BLAKE3_HASH_DIGEST_NUM_BYTES) -> bytes:
        """Return ``length`` output bytes; the hasher state is left unchanged."""
        if length < 0:
            raise ValueError("length must be non-negative")
        output = self._chunk.output()
        for left in reversed(self._cv_stack):
            output = _parent_output(left, output.chaining_value(), self._key, self._flags)
        return output.root_bytes(length)

    def hexdigest(self) -> str:
        """Return the 32-byte digest as lower-case hex."""
        return self.digest().hex()


def blake3(data: bytes) -> bytes:
    """Return the 32-byte BLAKE3 digest of ``data``."""
    return Blake3(data).digest()


def hash_all_coms(coms: Iterable[bytes]) -> bytes:
    """Hash a sequence of commitments into one digest."""
    hasher = Blake3()
    for com in coms:
        hasher.update(com)
    return hasher.digest()


def expand_digest(digest: bytes, num_rep: int) -> tuple[bytes, bytes]:
    """Chain-hash ``digest`` ``num_rep`` times.

    Returns the concatenation of all chained digests and the last digest.
    """
    current = bytes(digest)
    blocks = []
    for _ in range(num_rep):
        current = blake3(current)
        blocks.append(current)
    return b"".join(blocks), current


def commit_pb_secret(first_bit: int, voleith_macs: Sequence[bytes], randomness: bytes) -> bytes:
    """Commit to ``first_bit`` under ``randomness``.

    The MAC values are not part of the committed data.
    """
    return blake3(bytes([first_bit]) + bytes(randomness))
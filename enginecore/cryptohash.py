"""A custom 256-bit hash for data integrity checks. Not for security use."""

from __future__ import annotations

from typing import Union

HASH_SIZE = 32

_INITIAL_STATE = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)
_ROUND_CONSTANT = 0x428A2F98
_BLOCK_SIZE = 64
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

Data = Union[str, bytes, bytearray, memoryview]


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK32


class CryptoHash:
    """Incremental hasher: feed data with :meth:`update`, then :meth:`finalize`."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self._state = list(_INITIAL_STATE)
        self._buffer = bytearray()
        self._bit_count = 0

    def update(self, data: Data) -> None:
        """Add *data* to the hash; strings are hashed as UTF-8."""
        chunk = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        self._bit_count = (self._bit_count + len(chunk) * 8) & _MASK64
        self._buffer += chunk
        full = len(self._buffer) - len(self._buffer) % _BLOCK_SIZE
        for offset in range(0, full, _BLOCK_SIZE):
            self._process_block(self._buffer[offset:offset + _BLOCK_SIZE])
        del self._buffer[:full]

    def finalize(self) -> bytes:
        """Pad, return the 32-byte digest and reset for the next message."""
        bit_count = self._bit_count
        length_mod = (bit_count // 8) % _BLOCK_SIZE
        pad_len = 56 - length_mod if length_mod < 56 else 120 - length_mod
        self.update(b"\x80" + bytes(pad_len - 1) + bit_count.to_bytes(8, "big"))
        digest = b"".join(word.to_bytes(4, "big") for word in self._state)
        self._reset()
        return digest

    @staticmethod
    def compute(data: Data) -> bytes:
        """Return the digest of *data* in one call."""
        hasher = CryptoHash()
        hasher.update(data)
        return hasher.finalize()

    def _process_block(self, block: bytes) -> None:
        w = [int.from_bytes(block[k:k + 4], "big") for k in range(0, _BLOCK_SIZE, 4)]
        for i in range(16, 64):
            s0 = _rotr(w[i - 15], 7) ^ _rotr(w[i - 15], 18) ^ (w[i - 15] >> 3)
            s1 = _rotr(w[i - 2], 17) ^ _rotr(w[i - 2], 19) ^ (w[i - 2] >> 10)
            w.append((w[i - 16] + s0 + w[i - 7] + s1) & _MASK32)

        a, b, c, d, e, f, g, h = self._state
        for word in w:
            s1 = _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)
            ch = (e & f) ^ (~e & g)
            temp1 = (h + s1 + ch + _ROUND_CONSTANT + word) & _MASK32
            s0 = _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)
            maj = (a & b) ^ (a & c) ^ (b & c)
            temp2 = (s0 + maj) & _MASK32
            h, g, f, e = g, f, e, (d + temp1) & _MASK32
            d, c, b, a = c, b, a, (temp1 + temp2) & _MASK32

        self._state = [
            (old + new) & _MASK32
            for old, new in zip(self._state, (a, b, c, d, e, f, g, h))
        ]
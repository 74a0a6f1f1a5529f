"""Low-level helpers: legacy handle flags, block permutation and a fast string hash."""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import Any, Union

# Upper 16 bits of a legacy handle are flags, the lower 48 the address.
HANDLE_FLAG_READONLY = 0x1000000000000
HANDLE_FLAG_LOCKED = 0x2000000000000
HANDLE_FLAG_VIRTUAL = 0x4000000000000
ADDRESS_MASK = 0x0000FFFFFFFFFFFF

LEGACY_HANDLE_SIZE = 128

_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3
_MASK64 = 0xFFFFFFFFFFFFFFFF


def permute_block(data: MutableSequence[Any], key: int) -> None:
    """Shuffle *data* in place with a deterministic permutation seeded by *key*."""
    state = key & 0xFFFFFFFF
    for i in range(len(data) - 1, 0, -1):
        state = (state * 1103515245 + 12345) & 0x7FFFFFFF
        j = state % (i + 1)
        data[i], data[j] = data[j], data[i]


def fast_hash(text: Union[str, bytes, bytearray, memoryview]) -> int:
    """Return a 64-bit non-cryptographic hash of *text*.

    Strings are hashed as UTF-8. Bytes of 0x80 and above are sign-extended
    before mixing, as signed characters are.
    """
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    value = _FNV_OFFSET
    for byte in data:
        mixed = byte - 256 if byte >= 0x80 else byte
        value = ((value ^ (mixed & _MASK64)) * _FNV_PRIME) & _MASK64
    return value


def initialize_legacy_handle(handle: Any, seed: int) -> None:
    """Permute the first 128 bytes of a writable buffer in place; ``None`` is ignored."""
    if handle is None:
        return
    view = memoryview(handle).cast("B")
    if len(view) < LEGACY_HANDLE_SIZE:
        raise ValueError(
            f"legacy handle needs at least {LEGACY_HANDLE_SIZE} bytes, got {len(view)}"
        )
    permute_block(view[:LEGACY_HANDLE_SIZE], seed)
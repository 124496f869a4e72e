"""
Per-item hashing.

Turns one (namespace, name) identity into a 64-bit unsigned value:

    XXH64(name, seed=XXH64(namespace))

Seeding the name hash with the namespace hash scopes names to their
namespace without a separator character, so ("ab", "c") and ("a", "bc")
do not collide by construction.

IMPORTANT:
- Strings are hashed as their UTF-8 bytes.
- Values are laid out little-endian when they are fed to a fold.
  Signatures must reproduce across processes and machines, so native
  word order is never used.
- This module is pure and has no error conditions for string input.
"""

from __future__ import annotations

import xxhash


UINT64_MAX = (1 << 64) - 1


# ----------------------------------------------------------------------
# Internal primitives
# ----------------------------------------------------------------------

def _xxh64(data: str, seed: int = 0) -> int:
    return xxhash.xxh64_intdigest(data.encode("utf-8"), seed=seed)


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def hash_item(namespace: str, name: str) -> int:
    """
    Hash one work unit identity.

    Deterministic within a scheme version. Any string is accepted,
    including the empty string.
    """
    return _xxh64(name, seed=_xxh64(namespace))


def pack_uint64_le(value: int) -> bytes:
    """
    Encode a 64-bit unsigned value as 8 little-endian bytes.
    """
    if not 0 <= value <= UINT64_MAX:
        raise ValueError(f"value out of uint64 range: {value}")
    return value.to_bytes(8, "little")


__all__ = ["hash_item", "pack_uint64_le", "UINT64_MAX"]

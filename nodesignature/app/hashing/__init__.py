"""
nodesignature.app.hashing

Item hashing primitives used by the signature accumulator.
"""

from .item_hash import hash_item, pack_uint64_le

__all__ = [
    "hash_item",
    "pack_uint64_le",
]

"""
Working-set signature accumulator.

A "working set" is an unordered collection of namespaced work units
running at a given time on a node (pods on a Kubernetes node, for
example). Its signature identifies the membership concisely, without
enumerating and storing every name.

Algorithm:
    1. each addition appends hash_item(namespace, name)
    2. digest() sorts the hashes ascending, in place
    3. the sorted values are fed, 8 bytes little-endian each, to the
       scheme's streaming fold

Sorting before folding is what makes the digest independent of
addition order. Any change to the fold or to hash_item MUST keep
that property.

Duplicates are not suppressed: each addition contributes one hash, so
the signature fingerprints the multiset of additions. Set semantics is
a caller policy (see nodesignature.app.coordinator.working_set).
"""

from __future__ import annotations

import threading
from typing import Iterable

from nodesignature.app.errors import SignatureMismatchError
from nodesignature.app.hashing.item_hash import hash_item, pack_uint64_le
from nodesignature.app.schemas.identity import WorkUnitIdentity, resolve_identity
from nodesignature.app.schemas.scheme import DEFAULT_SCHEME, SignatureScheme
from nodesignature.app.signature.codec import encode_signature, parse_signature


EXPECTED_MAX_UNITS_PER_NODE = 256


class NodeSignature:
    """
    Order-independent signature of a working set.

    ``add``/``add_item`` and the canonical sort inside ``digest`` hold
    an internal lock, so one instance may be fed from several threads.
    """

    def __init__(
        self,
        scheme: SignatureScheme = DEFAULT_SCHEME,
        expected_items: int = EXPECTED_MAX_UNITS_PER_NODE,
    ) -> None:
        self._scheme = scheme
        # Sizing hint only; lists grow on demand.
        self._expected_items = expected_items
        self._hashes: list[int] = []
        self._lock = threading.Lock()

    @classmethod
    def from_items(
        cls,
        items: Iterable[WorkUnitIdentity],
        scheme: SignatureScheme = DEFAULT_SCHEME,
        expected_items: int = EXPECTED_MAX_UNITS_PER_NODE,
    ) -> "NodeSignature":
        sig = cls(scheme=scheme, expected_items=expected_items)
        sig.update(items)
        return sig

    @property
    def scheme(self) -> SignatureScheme:
        return self._scheme

    @property
    def expected_items(self) -> int:
        return self._expected_items

    def __len__(self) -> int:
        return len(self._hashes)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(scheme={self._scheme.scheme_id!r}, "
            f"items={len(self._hashes)})"
        )

    # ------------------------------------------------------------------
    # Additions
    # ------------------------------------------------------------------

    def add(self, namespace: str, name: str) -> None:
        value = hash_item(namespace, name)
        with self._lock:
            self._hashes.append(value)

    def add_item(self, item: WorkUnitIdentity) -> None:
        """
        Add anything exposing ``get_namespace()`` and ``get_name()``.

        Both values are resolved before the accumulator is touched. If
        either call fails, or returns something other than a string,
        IdentitySourceError is raised and nothing is added.
        """
        namespace, name = resolve_identity(item)
        self.add(namespace, name)

    def update(self, items: Iterable[WorkUnitIdentity]) -> None:
        """
        Add items in order. Stops at the first item whose identity
        cannot be resolved; items before it stay added.
        """
        for item in items:
            self.add_item(item)

    # ------------------------------------------------------------------
    # Digest and signature
    # ------------------------------------------------------------------

    def digest(self) -> bytes:
        """
        Fold the canonically ordered hashes through the scheme fold.

        Safe to call any number of times; an empty working set yields
        the fold's digest of zero bytes.
        """
        fold = self._scheme.new_fold()
        with self._lock:
            self._hashes.sort()
            for value in self._hashes:
                fold.update(pack_uint64_le(value))
        return fold.digest()

    def hexdigest(self) -> str:
        return self.digest().hex()

    def sign(self) -> str:
        return encode_signature(self._scheme, self.digest())

    def check(self, candidate: str) -> None:
        """
        Verify that ``candidate`` is the signature of this working set.

        Raises:
            MalformedSignatureError: too short, wrong prefix or separator,
                unparseable version.
            IncompatibleVersionError: well formed, but another version.
            SignatureMismatchError: comparable, but the digests differ.
                Carries both hex strings.
        """
        parsed = parse_signature(self._scheme, candidate)
        got = self.hexdigest()
        if got != parsed.digest_hex:
            raise SignatureMismatchError(expected=parsed.digest_hex, actual=got)


__all__ = ["NodeSignature", "EXPECTED_MAX_UNITS_PER_NODE"]

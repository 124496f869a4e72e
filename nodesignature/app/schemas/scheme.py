"""
Signature scheme definitions.

A scheme fixes everything that determines the text of a signature:

- prefix     fixed-width alphabetic scheme identifier
- version    fixed-width version token, in the form ``v<digits>``
- separator  optional literal between version and digest
- fold       streaming hash used to fold the sorted per-item hashes

Schemes are self-contained. Signatures produced by different schemes
are never comparable, and there is no migration between them.

Changing any field of a registered scheme changes every signature it
produces. Such a change MUST ship as a new scheme with a new version.
"""

from __future__ import annotations

import hashlib
import re
from enum import Enum

import xxhash
from pydantic import BaseModel, ConfigDict, Field, field_validator

from nodesignature.app.errors import UnknownSchemeError


_VERSION_RE = re.compile(r"^v[0-9]+$")


class FoldAlgorithm(str, Enum):
    """
    Streaming hash used to fold the canonical hash sequence.
    """

    XXH64 = "xxh64"
    SHA1 = "sha1"


class SignatureScheme(BaseModel):
    """
    One signature format generation.
    """

    scheme_id: str = Field(
        ...,
        description="Registry key, e.g. 'nsgn-v001'",
    )

    prefix: str = Field(
        ...,
        description="Fixed-width scheme identifier, e.g. 'nsgn'",
    )

    version: str = Field(
        ...,
        description="Fixed-width version token, e.g. 'v001'",
    )

    separator: str = Field(
        "",
        description="Literal between version and digest (may be empty)",
    )

    fold: FoldAlgorithm = Field(
        FoldAlgorithm.XXH64,
        description="Streaming hash folding the sorted item hashes",
    )

    min_digest_len: int = Field(
        8,
        ge=1,
        description="Minimum number of digest bytes accepted by check",
    )

    model_config = ConfigDict(frozen=True)

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("prefix")
    @classmethod
    def prefix_is_alphabetic(cls, v: str) -> str:
        if not (v.isascii() and v.isalpha()):
            raise ValueError(f"Scheme prefix must be ASCII letters: {v!r}")
        return v

    @field_validator("version")
    @classmethod
    def version_is_well_formed(cls, v: str) -> str:
        if not _VERSION_RE.match(v):
            raise ValueError(
                f"Scheme version must look like 'v<digits>': {v!r}"
            )
        return v

    @field_validator("separator")
    @classmethod
    def separator_is_ascii(cls, v: str) -> str:
        if not v.isascii():
            raise ValueError(f"Scheme separator must be ASCII: {v!r}")
        return v

    # ------------------------------------------------------------------
    # Derived layout
    # ------------------------------------------------------------------

    @property
    def header(self) -> str:
        """Everything that precedes the hex digest."""
        return self.prefix + self.version + self.separator

    @property
    def min_length(self) -> int:
        return len(self.header) + self.min_digest_len

    @property
    def digest_hex_len(self) -> int:
        return self.new_fold().digest_size * 2

    def new_fold(self):
        """
        Return a fresh streaming hash object for this scheme.

        The returned object exposes ``update()``, ``digest()`` and
        ``digest_size`` in the hashlib style.
        """
        if self.fold is FoldAlgorithm.XXH64:
            return xxhash.xxh64()
        return hashlib.new(self.fold.value)


# ---------------------------------------------------------------------------
# Registry (FROZEN CONTRACTS)
# ---------------------------------------------------------------------------

NSGN_V001 = SignatureScheme(
    scheme_id="nsgn-v001",
    prefix="nsgn",
    version="v001",
    fold=FoldAlgorithm.XXH64,
)

NS_V1 = SignatureScheme(
    scheme_id="ns-v1",
    prefix="ns",
    version="v1",
    separator="://",
    fold=FoldAlgorithm.SHA1,
)

DEFAULT_SCHEME = NSGN_V001

_SCHEMES: dict[str, SignatureScheme] = {
    scheme.scheme_id: scheme for scheme in (NSGN_V001, NS_V1)
}


def get_scheme(scheme_id: str) -> SignatureScheme:
    try:
        return _SCHEMES[scheme_id]
    except KeyError:
        raise UnknownSchemeError(
            f"Unknown signature scheme '{scheme_id}'. "
            f"Available schemes: {available_schemes()}"
        ) from None


def available_schemes() -> list[str]:
    return sorted(_SCHEMES)


__all__ = [
    "FoldAlgorithm",
    "SignatureScheme",
    "NSGN_V001",
    "NS_V1",
    "DEFAULT_SCHEME",
    "get_scheme",
    "available_schemes",
]

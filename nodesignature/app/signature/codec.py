"""
Signature text encoding and parsing.

Signature layout (all fields fixed width, concatenated):

    <prefix><version><separator><hex-digest>

Parsing is by fixed byte offsets derived from the scheme. Header fields
are ASCII, so their widths in characters and in bytes agree. The
separator, when a scheme defines one, is skipped and never treated as
data.

Error policy:
- structurally invalid text          -> MalformedSignatureError
- well formed, different version     -> IncompatibleVersionError
Digest comparison is NOT performed here; see NodeSignature.check().
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from nodesignature.app.errors import (
    IncompatibleVersionError,
    MalformedSignatureError,
)
from nodesignature.app.schemas.scheme import DEFAULT_SCHEME, SignatureScheme


class ParsedSignature(BaseModel):
    """
    The three fields of a signature string.
    """

    prefix: str
    version: str
    digest_hex: str

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def encode_signature(scheme: SignatureScheme, digest: bytes) -> str:
    return scheme.header + digest.hex()


# ---------------------------------------------------------------------------
# Version handling
# ---------------------------------------------------------------------------

def parse_version(scheme: SignatureScheme, token: str) -> int:
    """
    Parse a version token of the form ``v<digits>``.

    The token must have the scheme's version width.
    """
    if len(token) != len(scheme.version):
        raise MalformedSignatureError(
            f"version token {token!r} is not {len(scheme.version)} "
            "characters wide"
        )
    digits = token[1:]
    if not token.startswith("v") or not (digits.isascii() and digits.isdigit()):
        raise MalformedSignatureError(f"unparseable version token {token!r}")
    return int(digits)


def is_version_compatible(
    token: str,
    scheme: SignatureScheme = DEFAULT_SCHEME,
) -> bool:
    """
    Return True if signatures with this version token can be compared
    against signatures of ``scheme``.

    Only identical versions are comparable.
    """
    if len(token) != len(scheme.version):
        raise MalformedSignatureError(
            f"version token {token!r} is not {len(scheme.version)} "
            "characters wide"
        )
    return token == scheme.version


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _ascii_field(raw: bytes, start: int, end: int, field: str) -> str:
    try:
        return raw[start:end].decode("ascii")
    except UnicodeDecodeError:
        raise MalformedSignatureError(
            f"non-ASCII bytes in signature {field}"
        ) from None


def parse_signature(scheme: SignatureScheme, candidate: str) -> ParsedSignature:
    """
    Split a candidate signature into prefix, version and digest.

    Offsets and the minimum length are counted in UTF-8 bytes. Header
    fields must be ASCII; the digest field is returned as text and is
    only ever compared, never decoded.

    Raises MalformedSignatureError or IncompatibleVersionError. A
    returned value is guaranteed comparable with ``scheme``.
    """
    raw = candidate.encode("utf-8")
    if len(raw) < scheme.min_length:
        raise MalformedSignatureError(
            f"signature shorter than {scheme.min_length} bytes"
        )

    offset = len(scheme.prefix)
    prefix = _ascii_field(raw, 0, offset, "prefix")
    if prefix != scheme.prefix:
        raise MalformedSignatureError(f"unexpected prefix {prefix!r}")

    version = _ascii_field(raw, offset, offset + len(scheme.version), "version")
    offset += len(scheme.version)
    parse_version(scheme, version)

    if scheme.separator:
        separator = _ascii_field(
            raw, offset, offset + len(scheme.separator), "separator"
        )
        if separator != scheme.separator:
            raise MalformedSignatureError(
                f"missing separator {scheme.separator!r}"
            )
        offset += len(scheme.separator)

    if not is_version_compatible(version, scheme):
        raise IncompatibleVersionError(version, scheme.version)

    # The header is ASCII, so offset falls on a character boundary.
    return ParsedSignature(
        prefix=prefix,
        version=version,
        digest_hex=raw[offset:].decode("utf-8"),
    )


__all__ = [
    "ParsedSignature",
    "encode_signature",
    "parse_version",
    "is_version_compatible",
    "parse_signature",
]

"""
Order-independent signatures of working sets.

A working set is an unordered collection of namespaced work units (pods
on a node, for example). Its signature is a short versioned string that
changes whenever membership changes and never depends on the order in
which members were observed.
"""

from .errors import (
    SignatureError,
    MalformedSignatureError,
    IncompatibleVersionError,
    SignatureMismatchError,
    IdentitySourceError,
    UnknownSchemeError,
)
from .hashing import hash_item
from .schemas.identity import WorkUnit, WorkUnitIdentity
from .schemas.scheme import NSGN_V001, NS_V1, SignatureScheme, get_scheme
from .signature.codec import is_version_compatible
from .signature.node_signature import NodeSignature

__all__ = [
    "SignatureError",
    "MalformedSignatureError",
    "IncompatibleVersionError",
    "SignatureMismatchError",
    "IdentitySourceError",
    "UnknownSchemeError",
    "hash_item",
    "WorkUnit",
    "WorkUnitIdentity",
    "NSGN_V001",
    "NS_V1",
    "SignatureScheme",
    "get_scheme",
    "is_version_compatible",
    "NodeSignature",
]

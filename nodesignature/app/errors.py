"""
Exception hierarchy for working-set signatures.

Every error is raised to the immediate caller. Nothing in the core
retries or logs; callers decide whether a mismatch is fatal (e.g.
trigger a reconciliation) or informational.
"""

from __future__ import annotations


class SignatureError(Exception):
    """Base class for all signature related errors."""


class MalformedSignatureError(SignatureError, ValueError):
    """The signature text is structurally invalid."""


class IncompatibleVersionError(SignatureError):
    """
    The signature is well formed but was produced by a scheme version
    that cannot be compared against the current one.
    """

    def __init__(self, version: str, supported: str) -> None:
        super().__init__(
            f"incompatible version {version!r} (supported: {supported!r})"
        )
        self.version = version
        self.supported = supported


class SignatureMismatchError(SignatureError):
    """
    The signature is comparable but its digest differs from the
    digest of the current working set.
    """

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(
            f"signature mismatch got={actual!r} expected={expected!r}"
        )
        self.expected = expected
        self.actual = actual


class IdentitySourceError(SignatureError):
    """An item failed to report its namespace or name."""


class UnknownSchemeError(SignatureError, ValueError):
    pass

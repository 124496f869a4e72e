"""
Working-set signature coordination.

This module sits between callers that observe work units (a node
agent, a scrape loop, a reconciler) and the NodeSignature core. It
owns the policy decisions the core deliberately leaves open:

- which scheme to sign with (from SignatureConfig)
- whether repeated identities are collapsed before signing
- turning signature errors into a SignatureVerificationResult

Error handling policy:
    Signature errors (malformed, incompatible version, mismatch) are
    expected outcomes of a reconciliation cycle and are returned as
    values. IdentitySourceError is not: a work unit that cannot report
    its identity means the observed working set is incomplete, so it is
    logged and re-raised to the caller.
"""

from __future__ import annotations

import logging
from typing import Iterable

from nodesignature.app.config import SignatureConfig
from nodesignature.app.errors import (
    IdentitySourceError,
    IncompatibleVersionError,
    MalformedSignatureError,
    SignatureMismatchError,
)
from nodesignature.app.schemas.identity import WorkUnitIdentity, resolve_identity
from nodesignature.app.schemas.verification import (
    SignatureVerificationResult,
    VerificationStatus,
)
from nodesignature.app.signature.node_signature import NodeSignature

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Deduplication policy
# ---------------------------------------------------------------------------

def unique_identities(
    items: Iterable[WorkUnitIdentity],
) -> list[tuple[str, str]]:
    """
    Resolve each item once and drop repeated (namespace, name) pairs,
    keeping the first occurrence. Relative order is preserved.

    The resolved pairs are what gets signed, so an identity source is
    never asked twice for the same item.
    """
    seen: set[tuple[str, str]] = set()
    unique: list[tuple[str, str]] = []

    for item in items:
        key = resolve_identity(item)
        if key in seen:
            continue
        seen.add(key)
        unique.append(key)

    return unique


# ---------------------------------------------------------------------------
# Signing
# ---------------------------------------------------------------------------

def build_signature(
    items: Iterable[WorkUnitIdentity],
    *,
    config: SignatureConfig | None = None,
) -> NodeSignature:
    """
    Build a NodeSignature over ``items`` according to ``config``.

    Falls back to SignatureConfig.from_env() when no config is given.
    """
    config = config or SignatureConfig.from_env()

    sig = NodeSignature(
        scheme=config.scheme,
        expected_items=config.EXPECTED_UNITS_PER_NODE,
    )

    try:
        if config.DEDUPLICATE_WORK_UNITS:
            for namespace, name in unique_identities(items):
                sig.add(namespace, name)
        else:
            sig.update(items)
    except IdentitySourceError as exc:
        logger.error("working set: identity source failure: %s", exc)
        raise

    logger.debug(
        "working set: scheme=%s items=%d",
        config.SIGNATURE_SCHEME,
        len(sig),
    )
    return sig


def sign_working_set(
    items: Iterable[WorkUnitIdentity],
    *,
    config: SignatureConfig | None = None,
) -> str:
    return build_signature(items, config=config).sign()


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------

def verify_working_set(
    items: Iterable[WorkUnitIdentity],
    candidate: str,
    *,
    config: SignatureConfig | None = None,
) -> SignatureVerificationResult:
    """
    Compare ``candidate`` against the signature of ``items``.

    Never raises for signature errors; see the module docstring.
    """
    config = config or SignatureConfig.from_env()
    sig = build_signature(items, config=config)

    base = {
        "scheme_id": sig.scheme.scheme_id,
        "item_count": len(sig),
        "candidate": candidate,
    }

    try:
        sig.check(candidate)

    except MalformedSignatureError as exc:
        logger.warning("working set: malformed signature: %s", exc)
        return SignatureVerificationResult(
            status=VerificationStatus.MALFORMED,
            detail=str(exc),
            **base,
        )

    except IncompatibleVersionError as exc:
        logger.warning(
            "working set: incompatible signature version %s (supported %s)",
            exc.version,
            exc.supported,
        )
        return SignatureVerificationResult(
            status=VerificationStatus.INCOMPATIBLE_VERSION,
            detail=str(exc),
            **base,
        )

    except SignatureMismatchError as exc:
        logger.warning(
            "working set: signature mismatch got=%s expected=%s",
            exc.actual,
            exc.expected,
        )
        return SignatureVerificationResult(
            status=VerificationStatus.MISMATCH,
            expected_digest=exc.expected,
            actual_digest=exc.actual,
            detail=str(exc),
            **base,
        )

    digest = sig.hexdigest()
    logger.info(
        "working set: signature verified (%d items)", len(sig)
    )
    return SignatureVerificationResult(
        status=VerificationStatus.MATCH,
        expected_digest=digest,
        actual_digest=digest,
        **base,
    )


__all__ = [
    "unique_identities",
    "build_signature",
    "sign_working_set",
    "verify_working_set",
]

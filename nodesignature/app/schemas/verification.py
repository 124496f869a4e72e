"""
Verification outcome schema.

NodeSignature.check() reports problems by raising. Callers that
reconcile many nodes usually want a value instead; this model is that
value. It is produced by the working-set coordinator only.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VerificationStatus(str, Enum):
    """
    Result of comparing a candidate signature with a working set.
    """

    MATCH = "match"
    MISMATCH = "mismatch"
    INCOMPATIBLE_VERSION = "incompatible_version"
    MALFORMED = "malformed"


class SignatureVerificationResult(BaseModel):
    status: VerificationStatus

    scheme_id: str = Field(
        ...,
        description="Scheme the working set was signed with",
    )

    item_count: int = Field(
        ...,
        ge=0,
        description="Number of additions in the working set (duplicates included)",
    )

    candidate: str = Field(
        ...,
        description="Signature text presented for verification",
    )

    expected_digest: str | None = Field(
        None,
        description="Digest carried by the candidate signature",
    )

    actual_digest: str | None = Field(
        None,
        description="Digest of the current working set",
    )

    detail: str | None = Field(
        None,
        description="Human-readable reason for a non-match (diagnostic only)",
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def mismatch_carries_digests(self) -> "SignatureVerificationResult":
        if self.status is VerificationStatus.MISMATCH and (
            self.expected_digest is None or self.actual_digest is None
        ):
            raise ValueError(
                "A mismatch result must carry both expected and actual digests."
            )
        return self

    @property
    def is_match(self) -> bool:
        return self.status is VerificationStatus.MATCH


__all__ = ["VerificationStatus", "SignatureVerificationResult"]

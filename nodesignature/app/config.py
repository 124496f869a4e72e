"""
Runtime configuration for working-set signatures.

This module centralizes environment-driven settings: which signature
scheme new signatures are produced with, the expected working-set size
used as a sizing hint, and whether repeated identities are collapsed
before signing.

Configuration is read-only at runtime. Two processes that must agree on
signatures MUST run with the same scheme and deduplication policy.
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, field_validator

from nodesignature.app.errors import UnknownSchemeError
from nodesignature.app.schemas.scheme import (
    DEFAULT_SCHEME,
    SignatureScheme,
    get_scheme,
)
from nodesignature.app.signature.node_signature import (
    EXPECTED_MAX_UNITS_PER_NODE,
)

logger = logging.getLogger(__name__)


class SignatureConfig(BaseModel):
    """
    Runtime configuration for signature production and verification.
    """

    # ------------------------------------------------------------------
    # Signature format
    # ------------------------------------------------------------------

    SIGNATURE_SCHEME: str = Field(
        DEFAULT_SCHEME.scheme_id,
        description="Registry id of the scheme used to sign working sets",
    )

    # ------------------------------------------------------------------
    # Working-set policy
    # ------------------------------------------------------------------

    EXPECTED_UNITS_PER_NODE: int = Field(
        EXPECTED_MAX_UNITS_PER_NODE,
        description="Expected work units per node (sizing hint only)",
    )

    DEDUPLICATE_WORK_UNITS: bool = Field(
        False,
        description=(
            "Collapse repeated (namespace, name) identities before signing. "
            "Changes signatures of working sets that contain duplicates."
        ),
    )

    # ------------------------------------------------------------------
    # Validators (Pydantic v2)
    # ------------------------------------------------------------------

    @field_validator("SIGNATURE_SCHEME")
    @classmethod
    def scheme_is_registered(cls, v: str) -> str:
        try:
            get_scheme(v)
        except UnknownSchemeError as exc:
            raise ValueError(str(exc)) from exc
        return v

    @field_validator("EXPECTED_UNITS_PER_NODE")
    @classmethod
    def expected_units_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(
                f"EXPECTED_UNITS_PER_NODE must be positive, got {v}"
            )
        return v

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def scheme(self) -> SignatureScheme:
        return get_scheme(self.SIGNATURE_SCHEME)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "SignatureConfig":
        """
        Load configuration from environment variables.

        All values are parsed once and must remain immutable.
        """

        def env_bool(name: str, default: bool) -> bool:
            raw = os.getenv(name)
            if raw is None:
                return default
            return raw.lower() in {"1", "true", "yes", "on"}

        config = cls(
            SIGNATURE_SCHEME=os.getenv(
                "NODESIG_SIGNATURE_SCHEME", DEFAULT_SCHEME.scheme_id
            ),
            EXPECTED_UNITS_PER_NODE=int(
                os.getenv(
                    "NODESIG_EXPECTED_UNITS_PER_NODE",
                    str(EXPECTED_MAX_UNITS_PER_NODE),
                )
            ),
            DEDUPLICATE_WORK_UNITS=env_bool(
                "NODESIG_DEDUPLICATE_WORK_UNITS", False
            ),
        )
        logger.debug(
            "config: scheme=%s dedup=%s",
            config.SIGNATURE_SCHEME,
            config.DEDUPLICATE_WORK_UNITS,
        )
        return config

    model_config = {
        "frozen": True,
    }

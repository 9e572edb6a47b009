"""Claim Matching Enforcement - keeps only keys the upload's claims permit.

Invariants:
    - PURE: reads claims already resolved on context.principal, never a token
    - Standard upload: key date must be on or after the onset_date claim
    - Next-day upload: key date must equal the delayed_key_date claim
    - Non-matching keys are dropped silently; this filter never aborts

Design Decisions:
    - A principal without any date claim passes keys through: the claims
      filter narrows authorized uploads, it does not authenticate them
"""

from collections.abc import Sequence
from dataclasses import dataclass

from keygate.core.context import Principal, ValidationContext
from keygate.core.domain_types import UploadVariant
from keygate.core.keys import ExposureKey, day_number, key_day


def matches_claims(key: ExposureKey, principal: Principal) -> bool:
    """Rule: a key's date must fall inside what the principal's claims allow."""
    if principal.upload_variant == UploadVariant.NEXT_DAY:
        return key_day(key) == day_number(principal.delayed_key_date)
    if principal.onset_date is None:
        return True
    return key_day(key) >= day_number(principal.onset_date)


@dataclass(frozen=True)
class EnforceMatchingClaims:
    """Drop keys whose date contradicts the onset / delayed-key-date claim."""

    def apply_filter(
        self, context: ValidationContext, keys: Sequence[ExposureKey],
    ) -> list[ExposureKey]:
        principal = context.principal
        return [key for key in keys if matches_claims(key, principal)]

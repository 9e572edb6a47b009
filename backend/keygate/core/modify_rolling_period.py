"""Rolling Period Modifiers - repair known client defects in rolling_period.

Invariants:
    - PURE: return NEW lists of (possibly copied) keys, never mutate input
    - Batch size and order unchanged
    - Idempotent: applying twice equals applying once

Design Decisions:
    - iOS normalization is unconditional per key: that platform cannot
      publish variable-length keys, so every key becomes a full-day key
"""

from collections.abc import Sequence
from dataclasses import dataclass

from keygate.core.context import ValidationContext
from keygate.core.domain_types import OSType, ROLLING_PERIOD_MAX
from keygate.core.keys import ExposureKey


@dataclass(frozen=True)
class NormalizeRollingPeriodForLegacyIOS:
    """iOS uploads: force rolling_period to 144 on every key."""

    def apply_modify(
        self, context: ValidationContext, keys: Sequence[ExposureKey],
    ) -> list[ExposureKey]:
        if context.os_type != OSType.IOS:
            return list(keys)
        return [key.with_rolling_period(ROLLING_PERIOD_MAX) for key in keys]


@dataclass(frozen=True)
class FixZeroRollingPeriod:
    """rolling_period == 0 (early client bug) becomes 144; everything else untouched."""

    def apply_modify(
        self, context: ValidationContext, keys: Sequence[ExposureKey],
    ) -> list[ExposureKey]:
        return [
            key.with_rolling_period(ROLLING_PERIOD_MAX) if key.rolling_period == 0 else key
            for key in keys
        ]

"""Rolling Period Enforcement - drops keys whose rolling_period is out of range.

Invariants:
    - PURE: no IO, no side effects
    - Keeps ROLLING_PERIOD_MIN <= rolling_period <= ROLLING_PERIOD_MAX
    - allow_zero=True additionally keeps rolling_period == 0, leaving it for
      FixZeroRollingPeriod to repair after all filters ran
    - Drops silently (Enforce-style); never aborts

Design Decisions:
    - allow_zero is wired from the same flag that enables FixZeroRollingPeriod,
      so a zero period is either repaired or dropped, never stored
"""

from collections.abc import Sequence
from dataclasses import dataclass

from keygate.core.context import ValidationContext
from keygate.core.domain_types import ROLLING_PERIOD_MAX, ROLLING_PERIOD_MIN
from keygate.core.keys import ExposureKey


def is_valid_rolling_period(rolling_period: int, allow_zero: bool = False) -> bool:
    if allow_zero and rolling_period == 0:
        return True
    return ROLLING_PERIOD_MIN <= rolling_period <= ROLLING_PERIOD_MAX


@dataclass(frozen=True)
class EnforceValidRollingPeriod:
    """Drop keys with a rolling period outside [1, 144]."""
    allow_zero: bool = False

    def apply_filter(
        self, context: ValidationContext, keys: Sequence[ExposureKey],
    ) -> list[ExposureKey]:
        return [
            key for key in keys
            if is_valid_rolling_period(key.rolling_period, self.allow_zero)
        ]

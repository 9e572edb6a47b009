"""Key Date Window Enforcement - drops keys dated too far ahead or too far back.

Invariants:
    - PURE: every comparison uses context.today (derived from context.now, read once)
    - RemoveFutureKeys keeps key_date <= today + future_skew_days (boundary kept)
    - EnforceRetentionPeriod keeps key_date >= today - retention_days (boundary kept)
    - Both filters only drop; neither aborts

Design Decisions:
    - Comparison on integer day numbers, not datetimes: a key dated exactly
      on a boundary day survives, and absurd rolling_start_numbers simply
      fall outside the window
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from keygate.core.context import ValidationContext
from keygate.core.domain_types import DEFAULT_FUTURE_SKEW_DAYS, DEFAULT_RETENTION_DAYS
from keygate.core.keys import ExposureKey, day_number, key_day


def latest_allowed_day(today: date, future_skew_days: int) -> int:
    return day_number(today) + future_skew_days


def earliest_retained_day(today: date, retention_days: int) -> int:
    return day_number(today) - retention_days


@dataclass(frozen=True)
class RemoveFutureKeys:
    """Drop keys dated after "now + future_skew_days" (day after tomorrow by default)."""
    future_skew_days: int = DEFAULT_FUTURE_SKEW_DAYS

    def __post_init__(self) -> None:
        if self.future_skew_days < 0:
            raise ValueError(f"future_skew_days must be >= 0, got {self.future_skew_days}")

    def apply_filter(
        self, context: ValidationContext, keys: Sequence[ExposureKey],
    ) -> list[ExposureKey]:
        limit = latest_allowed_day(context.today, self.future_skew_days)
        return [key for key in keys if key_day(key) <= limit]


@dataclass(frozen=True)
class EnforceRetentionPeriod:
    """Drop keys older than the retention window ending at now."""
    retention_days: int = DEFAULT_RETENTION_DAYS

    def __post_init__(self) -> None:
        if self.retention_days < 1:
            raise ValueError(f"retention_days must be >= 1, got {self.retention_days}")

    def apply_filter(
        self, context: ValidationContext, keys: Sequence[ExposureKey],
    ) -> list[ExposureKey]:
        cutoff = earliest_retained_day(context.today, self.retention_days)
        return [key for key in keys if key_day(key) >= cutoff]

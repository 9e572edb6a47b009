"""Exposure Keys - the unit the pipeline validates, plus rolling-interval date math.

Invariants:
    - ExposureKey is frozen: modifiers build copies, never mutate inputs
    - key_day() is pure integer math: defined for EVERY rolling_start_number,
      including values no datetime can represent
    - Date rules compare day numbers (days since the Unix epoch, UTC), never datetimes
    - key_date() returns None when the key's day lies outside the datetime range

Design Decisions:
    - key_data kept as transmitted text: decoding is AssertValidEncoding's job,
      so a malformed payload can still be represented and rejected
    - transmission_risk_level carried through untouched (opaque to this core)
"""

from dataclasses import dataclass, replace
from datetime import date, timedelta

from keygate.core.domain_types import ROLLING_PERIOD_MAX, RollingStartNumber


_EPOCH_DATE = date(1970, 1, 1)
_INTERVALS_PER_DAY = ROLLING_PERIOD_MAX

# Day numbers of date.min / date.max
_MIN_DAY = (date.min - _EPOCH_DATE).days
_MAX_DAY = (date.max - _EPOCH_DATE).days


@dataclass(frozen=True)
class ExposureKey:
    """One uploaded rolling proximity key."""
    key_data: str
    rolling_start_number: int
    rolling_period: int
    fake: bool = False
    transmission_risk_level: int = 0

    def with_rolling_period(self, rolling_period: int) -> "ExposureKey":
        if rolling_period == self.rolling_period:
            return self
        return replace(self, rolling_period=rolling_period)


def day_number(day: date) -> int:
    """Days between the epoch and a UTC calendar date."""
    return (day - _EPOCH_DATE).days


def key_day(key: ExposureKey) -> int:
    """Day number on which the key's first interval starts (floor division)."""
    return key.rolling_start_number // _INTERVALS_PER_DAY


def key_date(key: ExposureKey) -> date | None:
    """Calendar date (UTC) of the key, or None if no date can represent it."""
    day = key_day(key)
    if not _MIN_DAY <= day <= _MAX_DAY:
        return None
    return _EPOCH_DATE + timedelta(days=day)


def rolling_start_number_for(day: date) -> RollingStartNumber:
    """First 10-minute interval of a UTC calendar date."""
    return RollingStartNumber(day_number(day) * _INTERVALS_PER_DAY)


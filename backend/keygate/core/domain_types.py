"""Domain Types - rich types that replace bare primitives across the key pipeline.

Invariants:
    - Key payloads decode to exactly KEY_DATA_LENGTH (16) bytes
    - Rolling periods target the range [ROLLING_PERIOD_MIN, ROLLING_PERIOD_MAX]
    - One rolling interval is 10 minutes; 144 intervals make one day
    - All valid states encoded as Enums: no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: reason codes serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

RollingStartNumber = NewType("RollingStartNumber", int)   # 10-min intervals since epoch
RollingPeriod = NewType("RollingPeriod", int)             # 1–144


# ─── Constants ───────────────────────────────────────────────────

KEY_DATA_LENGTH: int = 16
ROLLING_PERIOD_MIN: int = 1
ROLLING_PERIOD_MAX: int = 144

DEFAULT_RETENTION_DAYS: int = 14
DEFAULT_FUTURE_SKEW_DAYS: int = 2


# ─── Enums ───────────────────────────────────────────────────────

class OSType(str, Enum):
    """Uploading client platform, as reported in the User-Agent."""
    IOS = "ios"
    ANDROID = "android"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: str | None) -> "OSType":
        """Case-insensitive lookup; anything unrecognized is UNKNOWN."""
        if not raw:
            return cls.UNKNOWN
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.UNKNOWN


class AbortReason(str, Enum):
    """Reason codes carried by a rejected upload.

    Only INVALID_ENCODING is raised by the current filters; the others are
    reserved for Assert-style rules.
    """
    INVALID_ENCODING = "INVALID_ENCODING"
    INVALID_ROLLING_PERIOD = "INVALID_ROLLING_PERIOD"
    MISSING_CLAIMS = "MISSING_CLAIMS"


class UploadVariant(str, Enum):
    """Upload endpoint variant, derived from which claim the principal carries."""
    STANDARD = "standard"
    NEXT_DAY = "next_day"

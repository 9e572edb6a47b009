"""Pipeline Factory - startup wiring of the default filters and flagged modifiers.

Invariants:
    - Filter order is fixed: encoding, claims, future, retention, fake, rolling period
    - Optional modifiers are included only when their named flag is true, in
      OPTIONAL_MODIFIERS order
    - build_pipeline() returns a frozen pipeline; nothing registers afterwards

Design Decisions:
    - Explicit dict mapping flag name -> modifier factory (no auto-discovery)
    - Numeric windows (retention, future skew) read from Settings once
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, fields

from keygate.config import Settings, get_settings
from keygate.core.assert_encoding import AssertValidEncoding
from keygate.core.enforce_claims import EnforceMatchingClaims
from keygate.core.enforce_key_dates import EnforceRetentionPeriod, RemoveFutureKeys
from keygate.core.enforce_rolling_period import EnforceValidRollingPeriod
from keygate.core.modify_rolling_period import (
    FixZeroRollingPeriod, NormalizeRollingPeriodForLegacyIOS,
)
from keygate.core.pipeline import InsertPipeline
from keygate.core.protocols import KeyFilter, KeyModifier
from keygate.core.remove_fake_keys import RemoveFakeKeys

logger = logging.getLogger(__name__)


DEFAULT_FILTER_ORDER: tuple[str, ...] = (
    "AssertValidEncoding",
    "EnforceMatchingClaims",
    "RemoveFutureKeys",
    "EnforceRetentionPeriod",
    "RemoveFakeKeys",
    "EnforceValidRollingPeriod",
)

OPTIONAL_MODIFIERS: dict[str, Callable[[], KeyModifier]] = {
    "normalize_ios_rolling_period": NormalizeRollingPeriodForLegacyIOS,
    "fix_zero_rolling_period": FixZeroRollingPeriod,
}


@dataclass(frozen=True)
class PipelineFlags:
    """Startup decisions for optional modifiers, one boolean per modifier."""
    normalize_ios_rolling_period: bool = False
    fix_zero_rolling_period: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "PipelineFlags":
        return cls(
            normalize_ios_rolling_period=settings.normalize_ios_rolling_period,
            fix_zero_rolling_period=settings.fix_zero_rolling_period,
        )

    def enabled(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]


def default_filters(
    settings: Settings, flags: PipelineFlags,
) -> list[KeyFilter]:
    """The six filters, in DEFAULT_FILTER_ORDER."""
    return [
        AssertValidEncoding(),
        EnforceMatchingClaims(),
        RemoveFutureKeys(future_skew_days=settings.future_skew_days),
        EnforceRetentionPeriod(retention_days=settings.retention_days),
        RemoveFakeKeys(),
        EnforceValidRollingPeriod(allow_zero=flags.fix_zero_rolling_period),
    ]


def selected_modifiers(flags: PipelineFlags) -> list[KeyModifier]:
    enabled = set(flags.enabled())
    return [
        factory() for name, factory in OPTIONAL_MODIFIERS.items()
        if name in enabled
    ]


def build_pipeline(
    settings: Settings | None = None, flags: PipelineFlags | None = None,
) -> InsertPipeline:
    """Assemble and freeze the request-time pipeline. Call once at startup."""
    settings = settings or get_settings()
    flags = flags or PipelineFlags.from_settings(settings)

    pipeline = InsertPipeline()
    for key_filter in default_filters(settings, flags):
        pipeline.register_filter(key_filter)
    for modifier in selected_modifiers(flags):
        pipeline.register_modifier(modifier)
    pipeline.freeze()

    logger.info(f"Insert pipeline ready: {pipeline.describe()}")
    return pipeline

"""Key date windows - tests for future-key removal and retention enforcement.

Tests cover:
    - RemoveFutureKeys keeps the boundary day (today + 2) and drops later days
    - EnforceRetentionPeriod keeps the boundary day (today - retention) and drops earlier
    - both read only context.now, relative order of survivors preserved
    - invalid window configuration rejected at construction
"""

from datetime import datetime, timedelta, timezone

import pytest

from keygate.core.enforce_key_dates import EnforceRetentionPeriod, RemoveFutureKeys
from keygate.core.keys import ExposureKey
from tests.key_factory import TODAY, VALID_KEY_DATA, days_ago, make_context, make_key


def _days_ahead(n: int):
    return TODAY + timedelta(days=n)


# ─── RemoveFutureKeys ────────────────────────────────────────────

def test_future_boundary_day_kept():
    key = make_key(_days_ahead(2), offset_intervals=143)
    assert RemoveFutureKeys().apply_filter(make_context(), [key]) == [key]


def test_keys_after_boundary_dropped():
    today = make_key(TODAY, seed=1)
    tomorrow = make_key(_days_ahead(1), seed=2)
    too_far = make_key(_days_ahead(3), seed=3)
    result = RemoveFutureKeys().apply_filter(make_context(), [too_far, today, tomorrow])
    assert result == [today, tomorrow]


def test_custom_future_skew():
    tomorrow = make_key(_days_ahead(1))
    assert RemoveFutureKeys(future_skew_days=0).apply_filter(make_context(), [tomorrow]) == []


def test_future_uses_context_now_not_wall_clock():
    context = make_context(now=datetime(2020, 4, 1, 12, 0, tzinfo=timezone.utc))
    key = make_key(TODAY)
    assert RemoveFutureKeys().apply_filter(context, [key]) == []


def test_negative_future_skew_rejected():
    with pytest.raises(ValueError):
        RemoveFutureKeys(future_skew_days=-1)


# ─── EnforceRetentionPeriod ──────────────────────────────────────

def test_retention_boundary_day_kept():
    key = make_key(days_ago(14))
    assert EnforceRetentionPeriod(retention_days=14).apply_filter(make_context(), [key]) == [key]


def test_keys_older_than_retention_dropped():
    old = make_key(days_ago(15), seed=1)
    recent = make_key(days_ago(3), seed=2)
    edge = make_key(days_ago(14), offset_intervals=143, seed=3)
    result = EnforceRetentionPeriod(retention_days=14).apply_filter(
        make_context(), [recent, old, edge],
    )
    assert result == [recent, edge]


def test_retention_days_must_be_positive():
    with pytest.raises(ValueError):
        EnforceRetentionPeriod(retention_days=0)


# ─── Extreme rolling start numbers ───────────────────────────────

def _extreme_keys():
    return [
        ExposureKey(VALID_KEY_DATA, 2**31 - 1, 144),
        ExposureKey(VALID_KEY_DATA, -(2**31), 144),
    ]


def test_far_future_key_dropped_by_future_filter():
    good = make_key(days_ago(1))
    far_future, far_past = _extreme_keys()
    result = RemoveFutureKeys().apply_filter(make_context(), [good, far_future, far_past])
    assert result == [good, far_past]


def test_far_past_key_dropped_by_retention_filter():
    good = make_key(days_ago(1))
    far_future, far_past = _extreme_keys()
    result = EnforceRetentionPeriod().apply_filter(make_context(), [good, far_future, far_past])
    assert result == [good, far_future]

"""Encoding assertion - tests for the all-or-nothing 16-byte key_data check.

Tests cover:
    - valid batches pass unchanged
    - one bad key poisons the whole batch (INVALID_ENCODING)
    - wrong-length and non-base64 payloads both rejected
"""

import base64

import pytest

from keygate.core.assert_encoding import (
    AssertValidEncoding, decoded_length, is_valid_key_data,
)
from keygate.core.domain_types import AbortReason
from keygate.core.errors import KeyUploadRejectedError
from tests.key_factory import INVALID_KEY_DATA, VALID_KEY_DATA, make_context, make_key


def test_decoded_length_of_valid_key():
    assert decoded_length(VALID_KEY_DATA) == 16
    assert is_valid_key_data(VALID_KEY_DATA)


def test_decoded_length_of_undecodable_key():
    assert decoded_length(INVALID_KEY_DATA) is None
    assert decoded_length("not base64 !!") is None


def test_valid_batch_passes_unchanged():
    keys = [make_key(seed=i) for i in range(3)]
    result = AssertValidEncoding().apply_filter(make_context(), keys)
    assert result == keys


def test_empty_batch_passes():
    assert AssertValidEncoding().apply_filter(make_context(), []) == []


def test_twenty_three_character_key_aborts_batch():
    assert len(INVALID_KEY_DATA) == 23
    keys = [make_key(seed=1), make_key(key_data=INVALID_KEY_DATA), make_key(seed=2)]
    with pytest.raises(KeyUploadRejectedError) as exc_info:
        AssertValidEncoding().apply_filter(make_context(), keys)
    assert exc_info.value.reason == AbortReason.INVALID_ENCODING
    assert exc_info.value.context.key_index == 1
    assert exc_info.value.context.unit_name == "AssertValidEncoding"


def test_wrong_length_key_aborts_batch():
    short = base64.b64encode(bytes(15)).decode("ascii")
    long = base64.b64encode(bytes(32)).decode("ascii")
    for key_data in (short, long):
        with pytest.raises(KeyUploadRejectedError) as exc_info:
            AssertValidEncoding().apply_filter(
                make_context(), [make_key(key_data=key_data)],
            )
        assert exc_info.value.reason == AbortReason.INVALID_ENCODING
        assert "expected 16" in exc_info.value.detail

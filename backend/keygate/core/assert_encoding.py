"""Key Encoding Assertion - all-or-nothing check that every key_data is a 16-byte key.

Invariants:
    - PURE: no IO, no side effects
    - One malformed key rejects the whole batch (AbortReason.INVALID_ENCODING)
    - Valid batches pass through unchanged and in order

Design Decisions:
    - Strict base64 (validate=True): stray characters are a decode failure,
      not silently skipped
"""

import base64
import binascii
from collections.abc import Sequence
from dataclasses import dataclass

from keygate.core.context import ValidationContext
from keygate.core.domain_types import AbortReason, KEY_DATA_LENGTH
from keygate.core.errors import ErrorContext, KeyUploadRejectedError
from keygate.core.keys import ExposureKey


def decoded_length(key_data: str) -> int | None:
    """Byte length of a base64 payload, or None when it does not decode."""
    try:
        return len(base64.b64decode(key_data, validate=True))
    except (binascii.Error, ValueError):
        return None


def is_valid_key_data(key_data: str) -> bool:
    return decoded_length(key_data) == KEY_DATA_LENGTH


@dataclass(frozen=True)
class AssertValidEncoding:
    """Abort unless every key decodes to exactly KEY_DATA_LENGTH bytes."""

    def apply_filter(
        self, context: ValidationContext, keys: Sequence[ExposureKey],
    ) -> list[ExposureKey]:
        for index, key in enumerate(keys):
            length = decoded_length(key.key_data)
            if length != KEY_DATA_LENGTH:
                raise KeyUploadRejectedError(
                    AbortReason.INVALID_ENCODING,
                    _describe(index, length),
                    ErrorContext(
                        subject=context.principal.subject,
                        unit_name=type(self).__name__,
                        key_index=index,
                    ),
                )
        return list(keys)


def _describe(index: int, length: int | None) -> str:
    if length is None:
        return f"key #{index} is not valid base64"
    return f"key #{index} decodes to {length} bytes, expected {KEY_DATA_LENGTH}"

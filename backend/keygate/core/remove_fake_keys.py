"""Fake Key Removal - strips padding traffic before anything is stored."""

from collections.abc import Sequence
from dataclasses import dataclass

from keygate.core.context import ValidationContext
from keygate.core.keys import ExposureKey


@dataclass(frozen=True)
class RemoveFakeKeys:
    """Drop every key flagged fake; survivors keep their order."""

    def apply_filter(
        self, context: ValidationContext, keys: Sequence[ExposureKey],
    ) -> list[ExposureKey]:
        return [key for key in keys if not key.fake]

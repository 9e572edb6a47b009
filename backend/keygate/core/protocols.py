"""Boundary Protocols - contracts for pipeline units and the persistence shell.

Invariants:
    - Filters return a subsequence of their input (same relative order) or raise
      KeyUploadRejectedError; they never insert or reorder
    - Modifiers return a batch of identical size and order
    - Units hold no per-call state: (context, keys) is their entire input
    - Core NEVER imports a repository implementation: the shell provides one

Design Decisions:
    - Protocol over ABC: structural subtyping, any object with the method qualifies
    - One capability per protocol: a unit is either a filter or a modifier
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from keygate.core.context import ValidationContext
from keygate.core.keys import ExposureKey


class KeyFilter(Protocol):
    """Inspects a batch and shrinks it, or aborts the whole upload."""
    def apply_filter(
        self, context: ValidationContext, keys: Sequence[ExposureKey],
    ) -> list[ExposureKey]: ...


class KeyModifier(Protocol):
    """Rewrites fields of keys without changing batch size or order."""
    def apply_modify(
        self, context: ValidationContext, keys: Sequence[ExposureKey],
    ) -> list[ExposureKey]: ...


class ExposureKeyRepository(Protocol):
    """Contract for key persistence - implemented outside this package."""
    def insert_keys(
        self, keys: Sequence[ExposureKey], received_at: datetime,
    ) -> None: ...


def unit_name(unit: object) -> str:
    """Stable display name for a filter or modifier (class name)."""
    return type(unit).__name__

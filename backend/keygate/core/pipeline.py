"""Insert Pipeline - ordered filters, then ordered modifiers, over one upload batch.

Invariants:
    - Registration is append-only and ends at freeze() (or the first process())
    - process() runs ALL filters in registration order, then ALL modifiers
    - A KeyUploadRejectedError from any filter stops the run: no later unit executes
    - Filters never grow a batch; modifiers never resize it (PipelineContractError otherwise)
    - No per-call state on the engine: concurrent process() calls share only
      the frozen unit tuples

Design Decisions:
    - Validate before normalize: a modifier only ever sees keys that
      survived every filter
    - Abort as exception: Python short-circuits for free and the controller
      catches one error type
"""

import logging
from collections.abc import Sequence

from keygate.core.context import ValidationContext
from keygate.core.errors import (
    KeyUploadRejectedError, PipelineContractError, PipelineFrozenError,
)
from keygate.core.keys import ExposureKey
from keygate.core.protocols import KeyFilter, KeyModifier, unit_name

logger = logging.getLogger(__name__)


class InsertPipeline:
    """Filter/modifier engine configured once at startup, read-only afterwards."""

    def __init__(self) -> None:
        self._filters: list[KeyFilter] = []
        self._modifiers: list[KeyModifier] = []
        self._frozen = False

    # ─── Startup registration ───────────────────────────────────

    def register_filter(self, key_filter: KeyFilter) -> "InsertPipeline":
        self._ensure_open(key_filter)
        self._filters.append(key_filter)
        return self

    def register_modifier(self, modifier: KeyModifier) -> "InsertPipeline":
        self._ensure_open(modifier)
        self._modifiers.append(modifier)
        return self

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def filters(self) -> tuple[KeyFilter, ...]:
        return tuple(self._filters)

    @property
    def modifiers(self) -> tuple[KeyModifier, ...]:
        return tuple(self._modifiers)

    def describe(self) -> dict[str, list[str]]:
        """Unit names in execution order, for startup logs."""
        return {
            "filters": [unit_name(f) for f in self._filters],
            "modifiers": [unit_name(m) for m in self._modifiers],
        }

    # ─── Request time ───────────────────────────────────────────

    def process(
        self, context: ValidationContext, keys: Sequence[ExposureKey],
    ) -> list[ExposureKey]:
        """Run one batch through the pipeline.

        Returns the accepted, normalized keys. Raises KeyUploadRejectedError
        when a filter rejects the batch.
        """
        self._frozen = True
        current = list(keys)
        for key_filter in self._filters:
            current = self._run_filter(key_filter, context, current)
        for modifier in self._modifiers:
            current = self._run_modifier(modifier, context, current)
        return current

    def _run_filter(
        self, key_filter: KeyFilter, context: ValidationContext,
        keys: list[ExposureKey],
    ) -> list[ExposureKey]:
        name = unit_name(key_filter)
        try:
            result = list(key_filter.apply_filter(context, keys))
        except KeyUploadRejectedError as exc:
            logger.warning(
                f"Upload rejected by {name}: {exc.message}",
                extra={
                    "error_code": exc.code,
                    "unit_name": name,
                    "subject": context.principal.subject,
                    "received": len(keys),
                },
            )
            raise
        if len(result) > len(keys):
            raise PipelineContractError(name, len(keys), len(result))
        dropped = len(keys) - len(result)
        if dropped:
            logger.debug(
                f"{name} dropped {dropped} key(s)",
                extra={"unit_name": name, "dropped": dropped},
            )
        return result

    def _run_modifier(
        self, modifier: KeyModifier, context: ValidationContext,
        keys: list[ExposureKey],
    ) -> list[ExposureKey]:
        name = unit_name(modifier)
        result = list(modifier.apply_modify(context, keys))
        if len(result) != len(keys):
            raise PipelineContractError(name, len(keys), len(result))
        return result

    def _ensure_open(self, unit: object) -> None:
        if self._frozen:
            raise PipelineFrozenError(unit_name(unit))

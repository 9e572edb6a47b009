"""Error Hierarchy - typed, categorized exceptions for every pipeline failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - KeyUploadRejectedError is the ONLY abort channel: it always carries an AbortReason
    - Dropped keys are never errors; they only show up as a smaller batch
    - to_dict() produces a transport-neutral envelope; status mapping is the controller's job

Design Decisions:
    - Single hierarchy with KeyGateError base: a controller catches one type
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from keygate.core.domain_types import AbortReason


class ErrorSeverity(str, Enum):
    """ERROR: the upload was refused. CRITICAL: the service is misconfigured or buggy."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Who has to act: the client (VALIDATION) or the operator (the rest)."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where in the pipeline an error happened, and for which upload."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    subject: str | None = None
    unit_name: str | None = None
    key_index: int | None = None
    debug_info: dict[str, Any] | None = None


class KeyGateError(Exception):
    """Base for everything the pipeline raises; controllers catch this one type."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_dict(self) -> dict:
        """Convert to a structured error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "subject": self.context.subject,
                    "unit_name": self.context.unit_name,
                    "key_index": self.context.key_index,
                },
            }
        }


# ─── Abort (batch rejected) ─────────────────────────────────────

class KeyUploadRejectedError(KeyGateError):
    """A filter rejected the whole batch. Nothing from it may be stored."""
    def __init__(
        self,
        reason: AbortReason,
        detail: str | None = None,
        context: ErrorContext | None = None,
    ):
        message = f"Upload rejected: {reason.value}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(
            message, reason.value, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.reason = reason
        self.detail = detail


# ─── Configuration / Internal ───────────────────────────────────

class PipelineFrozenError(KeyGateError):
    """A filter or modifier was registered after the pipeline started serving."""
    def __init__(self, unit_name: str, context: ErrorContext | None = None):
        ctx = replace(context or ErrorContext(), unit_name=unit_name)
        super().__init__(
            f"Cannot register {unit_name}: pipeline is frozen",
            "PIPELINE_FROZEN", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, ctx,
        )


class PipelineContractError(KeyGateError):
    """A unit broke the batch-size contract (filter grew it, modifier resized it)."""
    def __init__(
        self, unit_name: str, before: int, after: int,
        context: ErrorContext | None = None,
    ):
        ctx = replace(
            context or ErrorContext(),
            unit_name=unit_name,
            debug_info={"before": before, "after": after},
        )
        super().__init__(
            f"{unit_name} changed batch size illegally ({before} -> {after})",
            "PIPELINE_CONTRACT_VIOLATION", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.before = before
        self.after = after

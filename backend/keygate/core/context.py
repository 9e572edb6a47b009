"""Validation Context - per-request inputs every filter and modifier reads.

Invariants:
    - ValidationContext and Principal are frozen: built once per request by the
      controller, never mutated by the pipeline
    - context.now is the single time reference for a batch (never re-read)
    - Principal carries already-verified claims; nothing here parses tokens

Design Decisions:
    - Principal as a typed structure with optional claim fields instead of a
      raw token: the verification collaborator resolves claims up front
    - User-Agent parsing tolerant: malformed headers yield UNKNOWN platform
      and empty versions, never an error
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone

from keygate.core.domain_types import OSType, UploadVariant


# Expected shape: "<appId>;<appVersion>;<appBuild>;<osType>;<osVersion>"
_UA_SEPARATOR = ";"
_UA_OS_TYPE_INDEX = 3
_UA_OS_VERSION_INDEX = 4
_UA_APP_VERSION_INDEX = 1


@dataclass(frozen=True)
class Principal:
    """Authenticated upload claims, resolved by the token verifier."""
    subject: str | None = None
    onset_date: date | None = None
    delayed_key_date: date | None = None

    @property
    def upload_variant(self) -> UploadVariant:
        if self.delayed_key_date is not None:
            return UploadVariant.NEXT_DAY
        return UploadVariant.STANDARD


@dataclass(frozen=True)
class ValidationContext:
    """Everything about the request that rules may depend on."""
    now: datetime
    os_type: OSType = OSType.UNKNOWN
    os_version: str = ""
    app_version: str = ""
    principal: Principal = Principal()

    def __post_init__(self) -> None:
        if self.now.tzinfo is None:
            raise ValueError("ValidationContext.now must be timezone-aware")

    @property
    def today(self) -> date:
        """UTC calendar date of `now`."""
        return self.now.astimezone(timezone.utc).date()

    @classmethod
    def from_request(
        cls, now: datetime, user_agent: str | None, principal: Principal,
    ) -> "ValidationContext":
        os_type, os_version, app_version = parse_user_agent(user_agent)
        return cls(
            now=now,
            os_type=os_type,
            os_version=os_version,
            app_version=app_version,
            principal=principal,
        )


def parse_user_agent(header: str | None) -> tuple[OSType, str, str]:
    """Split an upload User-Agent into (os_type, os_version, app_version)."""
    if not header:
        return OSType.UNKNOWN, "", ""
    parts = [part.strip() for part in header.split(_UA_SEPARATOR)]
    if len(parts) <= _UA_OS_VERSION_INDEX:
        return OSType.UNKNOWN, "", ""
    return (
        OSType.parse(parts[_UA_OS_TYPE_INDEX]),
        parts[_UA_OS_VERSION_INDEX],
        parts[_UA_APP_VERSION_INDEX],
    )

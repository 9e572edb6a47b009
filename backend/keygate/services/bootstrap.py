"""Startup - the single entry point a host service calls before taking traffic.

Invariants:
    - Settings read once; the same instance configures logging and the pipeline
    - Logging is set up before build_pipeline so its startup line is formatted

Design Decisions:
    - Mirrors an application lifespan hook: settings -> logging -> wiring
"""

import logging

from keygate.config import Settings, get_settings
from keygate.core.protocols import ExposureKeyRepository
from keygate.infrastructure.observability import setup_logging
from keygate.services.insert_service import KeyInsertService
from keygate.services.pipeline_factory import build_pipeline

logger = logging.getLogger(__name__)


def configure(
    repository: ExposureKeyRepository, settings: Settings | None = None,
) -> KeyInsertService:
    """Configure logging, build the frozen pipeline, return the insert service."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    pipeline = build_pipeline(settings)
    logger.info(
        f"Key insert service configured (retention={settings.retention_days}d, "
        f"future_skew={settings.future_skew_days}d)",
    )
    return KeyInsertService(pipeline, repository)

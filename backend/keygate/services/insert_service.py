"""Key Insert Service - imperative shell: run the pipeline, then hand keys to storage.

Invariants:
    - The repository is called only with a fully processed, non-empty batch
    - A rejected upload (KeyUploadRejectedError) propagates; nothing is stored
    - received_at passed to storage is context.now (the batch's single clock read)

Design Decisions:
    - Repository injected as a Protocol: storage stays an external collaborator
"""

import logging
from collections.abc import Sequence

from keygate.core.context import ValidationContext
from keygate.core.keys import ExposureKey
from keygate.core.pipeline import InsertPipeline
from keygate.core.protocols import ExposureKeyRepository

logger = logging.getLogger(__name__)


class KeyInsertService:
    """Validates an upload and stores what survives."""

    def __init__(
        self, pipeline: InsertPipeline, repository: ExposureKeyRepository,
    ):
        self.pipeline = pipeline
        self.repository = repository

    def insert(
        self, keys: Sequence[ExposureKey], context: ValidationContext,
    ) -> list[ExposureKey]:
        if not keys:
            return []

        accepted = self.pipeline.process(context, keys)
        if accepted:
            self.repository.insert_keys(accepted, context.now)

        logger.info(
            f"Upload processed: {len(accepted)}/{len(keys)} key(s) accepted",
            extra={
                "subject": context.principal.subject,
                "received": len(keys),
                "accepted": len(accepted),
            },
        )
        return accepted

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from taxdoc.domain.models import BatchResult, RenameOperation, RenameResult
from taxdoc.ports.tracker_port import ProcessedTrackerPort
from taxdoc.services.file_transaction import FileTransactionService

logger = logging.getLogger(__name__)


class BatchService:
    def __init__(
        self,
        transaction: FileTransactionService,
        tracker: ProcessedTrackerPort | None = None,
    ) -> None:
        self._transaction = transaction
        self._tracker = tracker

    def process_batch(self, operations: Sequence[RenameOperation]) -> BatchResult:
        """
        Run each operation in order, one at a time.

        A failed operation never stops the batch; the result holds one entry
        per input, in input order.
        """
        logger.info("Starting batch rename for %d files", len(operations))
        results: list[RenameResult] = []
        for op in operations:
            result = self._process_one(op)
            results.append(result)
            if not result.succeeded:
                logger.warning("Failed to rename %s, continuing with next file", op.source_path)

        batch = BatchResult(results=tuple(results))
        logger.info(
            "Batch rename completed: %d/%d successful", batch.success_count, batch.total_count
        )
        return batch

    def _process_one(self, op: RenameOperation) -> RenameResult:
        tracker_key = str(Path(op.source_path).resolve())
        if self._tracker is not None:
            try:
                already_processed = self._tracker.has_been_processed(tracker_key)
            except RuntimeError as exc:
                logger.error("Could not check processed state for %s: %s", op.source_path, exc)
                return RenameResult.failure(
                    op.source_path,
                    f"Could not check processed state for {op.source_path}: {exc}",
                )
            if already_processed:
                return RenameResult.failure(op.source_path, f"Already processed: {op.source_path}")
        if not op.canonical_name:
            return RenameResult.failure(
                op.source_path, f"No name suggestion available for {op.source_path}"
            )

        result = self._transaction.rename(op)
        if result.succeeded and self._tracker is not None:
            try:
                self._tracker.mark_processed(tracker_key, result.destination_path)
            except RuntimeError as exc:
                # The file already moved; report the move, log the bookkeeping miss.
                logger.error("Could not record %s as processed: %s", op.source_path, exc)
        return result

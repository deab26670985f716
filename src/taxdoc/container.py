from __future__ import annotations

from typing import Any

from taxdoc.adapters.memory_tracker import InMemoryTracker
from taxdoc.adapters.pdfminer_text import PdfMinerTextExtractor
from taxdoc.adapters.sqlite_tracker import SQLiteTracker
from taxdoc.settings import PDF_TEXT_MAX_PAGES
from taxdoc.services.batch_service import BatchService
from taxdoc.services.file_transaction import FileTransactionService
from taxdoc.services.filing_service import FilingService


def build_services(sqlite_path: str | None) -> dict[str, Any]:
    """Wire the filing pipeline; ``sqlite_path=None`` keeps tracking in memory."""

    tracker = SQLiteTracker(sqlite_path) if sqlite_path else InMemoryTracker()
    text_extractor = PdfMinerTextExtractor(max_pages=PDF_TEXT_MAX_PAGES)
    transaction = FileTransactionService()
    batch = BatchService(transaction, tracker)
    return {
        "filing_service": FilingService(batch, tracker, text_extractor),
        "batch_service": batch,
        "file_transaction": transaction,
        "text_extractor": text_extractor,
        "tracker": tracker,
    }

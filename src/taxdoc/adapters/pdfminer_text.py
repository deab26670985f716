from __future__ import annotations

import logging
from pathlib import Path

from taxdoc.ports.text_port import TextExtractorPort

logger = logging.getLogger(__name__)


class PdfMinerTextExtractor(TextExtractorPort):
    def __init__(self, max_pages: int | None = 3) -> None:
        self._max_pages = max_pages

    def extract_text(self, file_path: str) -> str:
        if Path(file_path).suffix.lower() != ".pdf":
            return ""
        try:
            from pdfminer.high_level import extract_text
        except ImportError as exc:
            raise RuntimeError(
                "pdfminer.six is required for PDF text extraction. "
                "Install with: pip install pdfminer.six"
            ) from exc
        try:
            return extract_text(file_path, maxpages=self._max_pages or 0) or ""
        except Exception as exc:
            logger.warning("Could not extract text from %s: %s", file_path, exc)
            return ""

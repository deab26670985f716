from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextExtractorPort(Protocol):
    def extract_text(self, file_path: str) -> str:
        """Return the document text, or an empty string when none is available."""

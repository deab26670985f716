from .memory_tracker import InMemoryTracker
from .pdfminer_text import PdfMinerTextExtractor
from .sqlite_tracker import SQLiteTracker

__all__ = ["InMemoryTracker", "PdfMinerTextExtractor", "SQLiteTracker"]

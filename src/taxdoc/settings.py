from __future__ import annotations

import os

SQLITE_PATH = os.getenv("TAXDOC_SQLITE_PATH", "./taxdoc.db")
WATCH_FOLDER = os.getenv("TAXDOC_WATCH_FOLDER", "")
TARGET_FOLDER = os.getenv("TAXDOC_TARGET_FOLDER", "")
DEFAULT_FISCAL_PERIOD = os.getenv("TAXDOC_DEFAULT_PERIOD", "") or None
EXTRACT_TEXT = os.getenv("TAXDOC_EXTRACT_TEXT", "false").lower() in {"1", "true", "yes"}
PDF_TEXT_MAX_PAGES = int(os.getenv("TAXDOC_PDF_TEXT_MAX_PAGES", "3"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "")

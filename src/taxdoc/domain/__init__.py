from .categories import DocumentCategory
from .classification import classify
from .folders import OTHER_FOLDER, resolve_folder
from .models import (
    BatchResult,
    ClassificationResult,
    PlannedFile,
    ProcessedRecord,
    RenameOperation,
    RenameResult,
)
from .naming import NAME_MAPPINGS, suggest_name

__all__ = [
    "BatchResult",
    "ClassificationResult",
    "DocumentCategory",
    "NAME_MAPPINGS",
    "OTHER_FOLDER",
    "PlannedFile",
    "ProcessedRecord",
    "RenameOperation",
    "RenameResult",
    "classify",
    "resolve_folder",
    "suggest_name",
]

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from .categories import NO_MATCH_CONFIDENCE, DocumentCategory


@dataclass(frozen=True)
class ClassificationResult:
    category: DocumentCategory
    company_name: str | None = None
    fiscal_period: str | None = None
    prefecture: str | None = None
    municipality: str | None = None
    confidence: float = NO_MATCH_CONFIDENCE
    submission_date: str | None = None


@dataclass
class PartialAnalysis:
    """Metadata recovered from one source (the filename or the PDF text)."""

    category: DocumentCategory | None = None
    company_name: str | None = None
    fiscal_period: str | None = None
    prefecture: str | None = None
    municipality: str | None = None
    submission_date: str | None = None
    confidence: float = NO_MATCH_CONFIDENCE


@dataclass(frozen=True)
class RenameOperation:
    source_path: str
    canonical_name: str | None
    target_folder: str
    create_subfolders: bool = True
    make_backup: bool = True


@dataclass(frozen=True)
class RenameResult:
    source_path: str
    destination_path: str
    succeeded: bool
    backup_path: str | None = None
    error_message: str | None = None
    category_folder: str | None = None

    @classmethod
    def failure(
        cls, source_path: str, message: str, backup_path: str | None = None
    ) -> RenameResult:
        return cls(
            source_path=source_path,
            destination_path="",
            succeeded=False,
            backup_path=backup_path,
            error_message=message,
        )


@dataclass(frozen=True)
class BatchResult:
    results: tuple[RenameResult, ...] = field(default_factory=tuple)

    @property
    def total_count(self) -> int:
        return len(self.results)

    @property
    def success_count(self) -> int:
        return sum(1 for result in self.results if result.succeeded)

    @property
    def failure_count(self) -> int:
        return self.total_count - self.success_count

    def category_counts(self) -> dict[str, int]:
        """Count successful files per category folder, in first-seen order."""

        counts: Counter[str] = Counter()
        for result in self.results:
            if not result.succeeded:
                continue
            folder = result.category_folder or Path(result.destination_path).parent.name
            counts[folder] += 1
        return dict(counts)


@dataclass(frozen=True)
class PlannedFile:
    path: str
    classification: ClassificationResult
    operation: RenameOperation


@dataclass
class ProcessedRecord:
    source_path: str
    destination_path: str | None
    processed_at: str

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from taxdoc.domain.categories import DocumentCategory
from taxdoc.domain.classification import classify
from taxdoc.domain.models import BatchResult, PlannedFile, RenameOperation
from taxdoc.domain.naming import SUPPORTED_EXTENSIONS, suggest_name
from taxdoc.ports.text_port import TextExtractorPort
from taxdoc.ports.tracker_port import ProcessedTrackerPort
from taxdoc.services.batch_service import BatchService

logger = logging.getLogger(__name__)


class FilingService:
    def __init__(
        self,
        batch: BatchService,
        tracker: ProcessedTrackerPort | None = None,
        text_extractor: TextExtractorPort | None = None,
    ) -> None:
        self._batch = batch
        self._tracker = tracker
        self._text_extractor = text_extractor

    def scan_folder(self, folder: str) -> list[Path]:
        """List unprocessed, non-hidden .pdf/.csv files directly inside ``folder``."""

        root = Path(folder)
        if not root.is_dir():
            raise FileNotFoundError(f"Folder not found: {folder}")

        candidates = sorted(
            (
                entry
                for entry in root.iterdir()
                if entry.is_file()
                and not entry.name.startswith(".")
                and entry.suffix.lower() in SUPPORTED_EXTENSIONS
            ),
            key=lambda entry: entry.name,
        )
        if self._tracker is None:
            new_files = candidates
        else:
            new_files = [
                entry
                for entry in candidates
                if not self._tracker.has_been_processed(str(entry.resolve()))
            ]
        logger.info("Found %d new files in %s", len(new_files), folder)
        return new_files

    def plan(
        self,
        paths: Iterable[Path | str],
        target_folder: str,
        create_subfolders: bool = True,
        make_backup: bool = True,
        default_fiscal_period: str | None = None,
        extract_text: bool = False,
    ) -> list[PlannedFile]:
        planned: list[PlannedFile] = []
        for raw_path in paths:
            path = Path(raw_path).resolve()
            text = self._read_text(path) if extract_text else None
            classification = classify(path.name, text)
            canonical_name = None
            if classification.category is not DocumentCategory.UNKNOWN:
                canonical_name = suggest_name(
                    classification.category,
                    classification.company_name,
                    classification.fiscal_period or default_fiscal_period,
                    classification.prefecture,
                    classification.municipality,
                )
            if canonical_name is None:
                logger.warning("No name suggestion for %s", path.name)
            else:
                logger.debug(
                    "Classified %s as %s (%.1f) -> %s",
                    path.name,
                    classification.category.value,
                    classification.confidence,
                    canonical_name,
                )
            planned.append(
                PlannedFile(
                    path=str(path),
                    classification=classification,
                    operation=RenameOperation(
                        source_path=str(path),
                        canonical_name=canonical_name,
                        target_folder=target_folder,
                        create_subfolders=create_subfolders,
                        make_backup=make_backup,
                    ),
                )
            )
        return planned

    def process_files(
        self,
        paths: Iterable[Path | str],
        target_folder: str,
        create_subfolders: bool = True,
        make_backup: bool = True,
        default_fiscal_period: str | None = None,
        extract_text: bool = False,
    ) -> BatchResult:
        planned = self.plan(
            paths,
            target_folder,
            create_subfolders=create_subfolders,
            make_backup=make_backup,
            default_fiscal_period=default_fiscal_period,
            extract_text=extract_text,
        )
        return self._batch.process_batch([item.operation for item in planned])

    def process_folder(
        self,
        watch_folder: str,
        target_folder: str,
        create_subfolders: bool = True,
        make_backup: bool = True,
        default_fiscal_period: str | None = None,
        extract_text: bool = False,
    ) -> BatchResult:
        return self.process_files(
            self.scan_folder(watch_folder),
            target_folder,
            create_subfolders=create_subfolders,
            make_backup=make_backup,
            default_fiscal_period=default_fiscal_period,
            extract_text=extract_text,
        )

    def _read_text(self, path: Path) -> str | None:
        if self._text_extractor is None:
            return None
        try:
            return self._text_extractor.extract_text(str(path)) or None
        except RuntimeError as exc:
            logger.warning("Text extraction unavailable for %s: %s", path.name, exc)
            return None

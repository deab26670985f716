from __future__ import annotations

import logging
import shutil
from pathlib import Path

from taxdoc.domain.folders import resolve_folder
from taxdoc.domain.models import RenameOperation, RenameResult
from taxdoc.domain.rename_logic import (
    BACKUP_DIR_NAME,
    backup_file_name,
    has_parent_traversal,
    is_valid_file_name,
    next_available_path,
)

logger = logging.getLogger(__name__)


class FileTransactionService:
    """
    Move one source file into its category folder under a target base.

    ``rename`` never raises. Steps that already ran are not rolled back, so a
    failed result may leave a backup copy behind in ``.backup``.
    """

    def rename(self, op: RenameOperation) -> RenameResult:
        source = Path(op.source_path)
        canonical_name = op.canonical_name or ""
        logger.info("Renaming file: %s -> %s", op.source_path, canonical_name)

        if not source.is_file():
            return self._fail(op, f"Source file not found: {op.source_path}")
        if not is_valid_file_name(canonical_name):
            return self._fail(op, f"Invalid file name: {canonical_name}")
        if has_parent_traversal(op.target_folder):
            return self._fail(op, f"Invalid target folder path: {op.target_folder}")

        backup_path: Path | None = None
        try:
            target_base = Path(op.target_folder)
            category_folder = resolve_folder(canonical_name) if op.create_subfolders else ""
            destination_dir = target_base / category_folder if category_folder else target_base
            if not destination_dir.exists():
                destination_dir.mkdir(parents=True, exist_ok=True)
                logger.info("Created directory: %s", destination_dir)

            destination = next_available_path(destination_dir / canonical_name)
            if destination.name != canonical_name:
                logger.warning("File already exists, using: %s", destination)

            if op.make_backup:
                backup_path = self._create_backup(source, target_base)

            # Re-probe right before the move; never overwrite.
            destination = next_available_path(destination)
            shutil.move(str(source), str(destination))
        except OSError as exc:
            return self._fail(
                op,
                f"Failed to move {op.source_path}: {exc}",
                backup_path=str(backup_path) if backup_path else None,
            )

        logger.info("File renamed successfully: %s", destination)
        return RenameResult(
            source_path=op.source_path,
            destination_path=str(destination),
            succeeded=True,
            backup_path=str(backup_path) if backup_path else None,
            category_folder=category_folder or None,
        )

    def restore_from_backup(self, backup_path: str, original_path: str) -> Path:
        """Copy a backup back to ``original_path``, replacing whatever is there."""

        backup = Path(backup_path)
        if not backup.is_file():
            raise FileNotFoundError(f"Backup file not found: {backup_path}")
        original = Path(original_path)
        original.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(backup, original)
        logger.info("File restored from backup: %s", original)
        return original

    def _create_backup(self, source: Path, target_base: Path) -> Path:
        backup_dir = target_base / BACKUP_DIR_NAME
        backup_dir.mkdir(parents=True, exist_ok=True)
        backup_path = next_available_path(backup_dir / backup_file_name(source.name))
        shutil.copy2(source, backup_path)
        logger.info("Backup created: %s", backup_path)
        return backup_path

    def _fail(
        self, op: RenameOperation, message: str, backup_path: str | None = None
    ) -> RenameResult:
        logger.error("Error renaming file %s: %s", op.source_path, message)
        return RenameResult.failure(op.source_path, message, backup_path=backup_path)

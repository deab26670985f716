from __future__ import annotations

from typing import Protocol, runtime_checkable

from taxdoc.domain.models import ProcessedRecord


@runtime_checkable
class ProcessedTrackerPort(Protocol):
    def has_been_processed(self, source_path: str) -> bool:
        """Return True when the exact source path was already filed."""

    def mark_processed(self, source_path: str, destination_path: str | None = None) -> None:
        """Record a source path as filed."""

    def list_processed(self) -> list[ProcessedRecord]:
        """Return all processed records, oldest first."""

    def forget(self, source_path: str) -> None:
        """Drop a source path so a later scan picks it up again."""

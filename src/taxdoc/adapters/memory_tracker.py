from __future__ import annotations

from taxdoc.domain.models import ProcessedRecord
from taxdoc.ports.tracker_port import ProcessedTrackerPort
from taxdoc.services.time_utils import now_local_iso


class InMemoryTracker(ProcessedTrackerPort):
    def __init__(self) -> None:
        self._records: dict[str, ProcessedRecord] = {}

    def has_been_processed(self, source_path: str) -> bool:
        return source_path in self._records

    def mark_processed(self, source_path: str, destination_path: str | None = None) -> None:
        self._records[source_path] = ProcessedRecord(
            source_path=source_path,
            destination_path=destination_path,
            processed_at=now_local_iso(),
        )

    def list_processed(self) -> list[ProcessedRecord]:
        return list(self._records.values())

    def forget(self, source_path: str) -> None:
        self._records.pop(source_path, None)

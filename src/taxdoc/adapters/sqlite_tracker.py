from __future__ import annotations

import sqlite3
from pathlib import Path

from taxdoc.domain.models import ProcessedRecord
from taxdoc.ports.tracker_port import ProcessedTrackerPort
from taxdoc.services.time_utils import now_local_iso


class SQLiteTracker(ProcessedTrackerPort):
    def __init__(self, sqlite_path: str) -> None:
        self._sqlite_path = sqlite_path
        Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def has_been_processed(self, source_path: str) -> bool:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT 1 FROM processed_files WHERE source_path = ?",
                    (source_path,),
                ).fetchone()
            return row is not None
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to look up processed file") from exc

    def mark_processed(self, source_path: str, destination_path: str | None = None) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO processed_files(source_path, destination_path, processed_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(source_path) DO UPDATE SET
                        destination_path = excluded.destination_path,
                        processed_at = excluded.processed_at
                    """,
                    (source_path, destination_path, now_local_iso()),
                )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to mark file as processed") from exc

    def list_processed(self) -> list[ProcessedRecord]:
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    """
                    SELECT source_path, destination_path, processed_at
                    FROM processed_files
                    ORDER BY processed_at ASC, rowid ASC
                    """
                ).fetchall()
            return [
                ProcessedRecord(source_path=row[0], destination_path=row[1], processed_at=row[2])
                for row in rows
            ]
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to list processed files") from exc

    def forget(self, source_path: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    "DELETE FROM processed_files WHERE source_path = ?",
                    (source_path,),
                )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to forget processed file") from exc

    def _ensure_schema(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS processed_files(
                        source_path TEXT PRIMARY KEY,
                        destination_path TEXT,
                        processed_at TEXT NOT NULL
                    )
                    """
                )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to initialize processed file schema") from exc

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._sqlite_path)

from pathlib import Path
from unittest.mock import Mock

from taxdoc.adapters.memory_tracker import InMemoryTracker
from taxdoc.domain.models import BatchResult, RenameOperation, RenameResult
from taxdoc.services.batch_service import BatchService
from taxdoc.services.file_transaction import FileTransactionService


def _ok(op: RenameOperation, folder: str = "0000番台_法人税") -> RenameResult:
    return RenameResult(
        source_path=op.source_path,
        destination_path=f"{op.target_folder}/{folder}/{op.canonical_name}",
        succeeded=True,
        category_folder=folder,
    )


def test_process_batch_runs_in_order_and_continues_after_failure() -> None:
    ops = [
        RenameOperation("/in/a.pdf", "0001_x_2407.pdf", "/out"),
        RenameOperation("/in/b.pdf", "0003_y_2407.pdf", "/out"),
        RenameOperation("/in/c.pdf", "3001_z_2407.pdf", "/out"),
    ]
    transaction = Mock()
    transaction.rename.side_effect = [
        _ok(ops[0]),
        RenameResult.failure(ops[1].source_path, "Source file not found: /in/b.pdf"),
        _ok(ops[2], "3000番台_消費税"),
    ]

    batch = BatchService(transaction).process_batch(ops)

    assert [call.args[0] for call in transaction.rename.call_args_list] == ops
    assert [result.source_path for result in batch.results] == [op.source_path for op in ops]
    assert batch.total_count == 3
    assert batch.success_count == 2
    assert batch.failure_count == 1
    assert batch.category_counts() == {"0000番台_法人税": 1, "3000番台_消費税": 1}


def test_process_batch_empty_input() -> None:
    batch = BatchService(Mock()).process_batch([])

    assert batch == BatchResult(results=())
    assert batch.total_count == 0
    assert batch.category_counts() == {}


def test_missing_canonical_name_fails_without_touching_files() -> None:
    transaction = Mock()
    op = RenameOperation("/in/readme.pdf", None, "/out")

    batch = BatchService(transaction).process_batch([op])

    transaction.rename.assert_not_called()
    assert batch.results[0].error_message == "No name suggestion available for /in/readme.pdf"


def test_successful_moves_are_recorded_and_skipped_next_time() -> None:
    op = RenameOperation("/in/a.pdf", "0001_x_2407.pdf", "/out")
    transaction = Mock()
    transaction.rename.return_value = _ok(op)
    tracker = InMemoryTracker()
    service = BatchService(transaction, tracker)

    first = service.process_batch([op])
    second = service.process_batch([op])

    assert first.success_count == 1
    assert tracker.has_been_processed("/in/a.pdf")
    assert tracker.list_processed()[0].destination_path == "/out/0000番台_法人税/0001_x_2407.pdf"
    assert transaction.rename.call_count == 1
    assert second.results[0].error_message == "Already processed: /in/a.pdf"


def test_failed_moves_are_not_recorded() -> None:
    op = RenameOperation("/in/a.pdf", "0001_x_2407.pdf", "/out")
    transaction = Mock()
    transaction.rename.return_value = RenameResult.failure(op.source_path, "boom")
    tracker = Mock()
    tracker.has_been_processed.return_value = False

    BatchService(transaction, tracker).process_batch([op])

    tracker.mark_processed.assert_not_called()


def test_tracker_write_failure_keeps_move_result() -> None:
    op = RenameOperation("/in/a.pdf", "0001_x_2407.pdf", "/out")
    transaction = Mock()
    transaction.rename.return_value = _ok(op)
    tracker = Mock()
    tracker.has_been_processed.return_value = False
    tracker.mark_processed.side_effect = RuntimeError("Failed to mark file as processed")

    batch = BatchService(transaction, tracker).process_batch([op])

    assert batch.success_count == 1


def test_same_canonical_name_twice_gets_suffixed(tmp_path: Path) -> None:
    inbox = tmp_path / "inbox"
    inbox.mkdir()
    out = tmp_path / "out"
    first = inbox / "法人税　受信通知.pdf"
    second = inbox / "消費税　受信通知.pdf"
    first.write_text("1", encoding="utf-8")
    second.write_text("2", encoding="utf-8")
    ops = [
        RenameOperation(str(first), "0003_受信通知_XXXX.pdf", str(out), make_backup=False),
        RenameOperation(str(second), "0003_受信通知_XXXX.pdf", str(out), make_backup=False),
    ]

    batch = BatchService(FileTransactionService()).process_batch(ops)

    names = [Path(result.destination_path).name for result in batch.results]
    assert names == ["0003_受信通知_XXXX.pdf", "0003_受信通知_XXXX_(1).pdf"]
    assert batch.category_counts() == {"0000番台_法人税": 2}


def test_tracker_lookup_failure_fails_that_file_and_continues() -> None:
    ops = [
        RenameOperation("/in/a.pdf", "0001_x_2407.pdf", "/out"),
        RenameOperation("/in/b.pdf", "0003_y_2407.pdf", "/out"),
    ]
    transaction = Mock()
    transaction.rename.return_value = _ok(ops[1])
    tracker = Mock()
    tracker.has_been_processed.side_effect = [
        RuntimeError("Failed to look up processed file"),
        False,
    ]

    batch = BatchService(transaction, tracker).process_batch(ops)

    assert batch.total_count == 2
    assert not batch.results[0].succeeded
    assert batch.results[0].error_message == (
        "Could not check processed state for /in/a.pdf: Failed to look up processed file"
    )
    assert batch.results[1].succeeded
    transaction.rename.assert_called_once_with(ops[1])


def test_tracker_keys_are_resolved_absolute_paths(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    op = RenameOperation("inbox/a.pdf", "0001_x_2407.pdf", "out")
    transaction = Mock()
    transaction.rename.return_value = _ok(op)
    tracker = InMemoryTracker()
    service = BatchService(transaction, tracker)

    service.process_batch([op])
    absolute = RenameOperation(str(tmp_path / "inbox" / "a.pdf"), "0001_x_2407.pdf", "out")
    again = service.process_batch([absolute])

    assert [record.source_path for record in tracker.list_processed()] == [
        str((tmp_path / "inbox" / "a.pdf").resolve())
    ]
    assert again.results[0].error_message.startswith("Already processed")

from pathlib import Path

import pytest

from taxdoc.domain.models import RenameOperation
from taxdoc.services.file_transaction import FileTransactionService

CORPORATE = "0001_法人税及び地方法人税申告書_2407.pdf"


def _source(tmp_path: Path, name: str = "input.pdf", content: str = "pdf bytes") -> Path:
    inbox = tmp_path / "inbox"
    inbox.mkdir(exist_ok=True)
    path = inbox / name
    path.write_text(content, encoding="utf-8")
    return path


def test_rename_moves_into_category_folder_with_backup(tmp_path: Path) -> None:
    source = _source(tmp_path)
    out = tmp_path / "out"

    result = FileTransactionService().rename(
        RenameOperation(str(source), CORPORATE, str(out))
    )

    assert result.succeeded
    assert result.error_message is None
    destination = Path(result.destination_path)
    assert destination == out / "0000番台_法人税" / CORPORATE
    assert destination.read_text(encoding="utf-8") == "pdf bytes"
    assert not source.exists()
    assert result.category_folder == "0000番台_法人税"

    backup = Path(result.backup_path)
    assert backup.parent == out / ".backup"
    assert backup.name.endswith("Z_input.pdf")
    assert backup.read_text(encoding="utf-8") == "pdf bytes"


def test_rename_missing_source_writes_nothing(tmp_path: Path) -> None:
    out = tmp_path / "out"
    missing = tmp_path / "ghost.pdf"

    result = FileTransactionService().rename(
        RenameOperation(str(missing), CORPORATE, str(out))
    )

    assert not result.succeeded
    assert result.error_message == f"Source file not found: {missing}"
    assert result.destination_path == ""
    assert result.backup_path is None
    assert not out.exists()


@pytest.mark.parametrize(
    "canonical_name",
    ["0001_a?b_2407.pdf", "0001_report_2407.docx", "a" * 300 + ".pdf", ".pdf", ""],
)
def test_rename_rejects_invalid_names(tmp_path: Path, canonical_name: str) -> None:
    source = _source(tmp_path)
    out = tmp_path / "out"

    result = FileTransactionService().rename(
        RenameOperation(str(source), canonical_name, str(out))
    )

    assert not result.succeeded
    assert result.error_message.startswith("Invalid file name")
    assert source.exists()
    assert not out.exists()


def test_rename_rejects_parent_traversal(tmp_path: Path) -> None:
    source = _source(tmp_path)

    result = FileTransactionService().rename(
        RenameOperation(str(source), CORPORATE, "../outside")
    )

    assert not result.succeeded
    assert result.error_message == "Invalid target folder path: ../outside"
    assert source.exists()


def test_rename_never_overwrites_existing_destination(tmp_path: Path) -> None:
    source = _source(tmp_path, content="new")
    out = tmp_path / "out"
    folder = out / "0000番台_法人税"
    folder.mkdir(parents=True)
    existing = folder / CORPORATE
    existing.write_text("old", encoding="utf-8")

    result = FileTransactionService().rename(
        RenameOperation(str(source), CORPORATE, str(out), make_backup=False)
    )

    assert result.succeeded
    assert Path(result.destination_path).name == "0001_法人税及び地方法人税申告書_2407_(1).pdf"
    assert existing.read_text(encoding="utf-8") == "old"
    assert Path(result.destination_path).read_text(encoding="utf-8") == "new"


def test_rename_flat_mode_without_backup(tmp_path: Path) -> None:
    source = _source(tmp_path)
    out = tmp_path / "out"

    result = FileTransactionService().rename(
        RenameOperation(
            str(source), CORPORATE, str(out), create_subfolders=False, make_backup=False
        )
    )

    assert result.succeeded
    assert Path(result.destination_path) == out / CORPORATE
    assert result.backup_path is None
    assert result.category_folder is None
    assert not (out / ".backup").exists()


def test_rename_unmapped_prefix_goes_to_other_folder(tmp_path: Path) -> None:
    source = _source(tmp_path)
    out = tmp_path / "out"

    result = FileTransactionService().rename(
        RenameOperation(str(source), "9001_misc_2407.pdf", str(out), make_backup=False)
    )

    assert result.succeeded
    assert Path(result.destination_path).parent.name == "その他"


def test_backups_of_same_name_do_not_collide(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(
        "taxdoc.services.file_transaction.backup_file_name",
        lambda name: f"2025-01-01T00-00-00-000Z_{name}",
    )
    service = FileTransactionService()
    out = tmp_path / "out"
    first = _source(tmp_path, content="one")
    first_result = service.rename(RenameOperation(str(first), CORPORATE, str(out)))
    second = _source(tmp_path, content="two")
    second_result = service.rename(RenameOperation(str(second), CORPORATE, str(out)))

    assert first_result.succeeded and second_result.succeeded
    assert first_result.backup_path != second_result.backup_path
    assert Path(first_result.backup_path).read_text(encoding="utf-8") == "one"
    assert Path(second_result.backup_path).read_text(encoding="utf-8") == "two"


def test_move_failure_reports_error_and_keeps_backup(tmp_path: Path, monkeypatch) -> None:
    def _boom(src, dst):
        raise PermissionError("read-only target")

    monkeypatch.setattr("taxdoc.services.file_transaction.shutil.move", _boom)
    source = _source(tmp_path)
    out = tmp_path / "out"

    result = FileTransactionService().rename(RenameOperation(str(source), CORPORATE, str(out)))

    assert not result.succeeded
    assert "read-only target" in result.error_message
    assert result.backup_path is not None
    assert Path(result.backup_path).exists()
    assert source.exists()


def test_restore_from_backup(tmp_path: Path) -> None:
    source = _source(tmp_path)
    out = tmp_path / "out"
    service = FileTransactionService()
    result = service.rename(RenameOperation(str(source), CORPORATE, str(out)))

    restored = service.restore_from_backup(result.backup_path, str(source))

    assert restored == source
    assert source.read_text(encoding="utf-8") == "pdf bytes"


def test_restore_from_missing_backup_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Backup file not found"):
        FileTransactionService().restore_from_backup(
            str(tmp_path / "nope.pdf"), str(tmp_path / "a.pdf")
        )

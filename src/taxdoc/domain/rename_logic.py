from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path

from .naming import SUPPORTED_EXTENSIONS

INVALID_FILENAME_CHARS = set('<>:"|?*/\\')
MAX_FILENAME_LENGTH = 255
BACKUP_DIR_NAME = ".backup"


def is_valid_file_name(name: str) -> bool:
    """
    Check a canonical name against the filing rules: no reserved or control
    characters, at most 255 characters, and a .pdf or .csv extension.

    Examples:
        >>> is_valid_file_name("0001_法人税及び地方法人税申告書_2407.pdf")
        True
        >>> is_valid_file_name("0001_a?b_2407.pdf")
        False
        >>> is_valid_file_name("0001_report_2407.docx")
        False
    """
    if not name or not name.strip():
        return False
    for ch in name:
        if ch in INVALID_FILENAME_CHARS:
            return False
        codepoint = ord(ch)
        if codepoint < 32 or codepoint == 127:
            return False
    if len(name) > MAX_FILENAME_LENGTH:
        return False
    base, ext = split_extension(name)
    if not base:
        return False
    return ext.lower() in SUPPORTED_EXTENSIONS


def has_parent_traversal(folder: str) -> bool:
    """
    Return True when the normalized folder still walks up with ``..``.

    Examples:
        >>> has_parent_traversal("/srv/taxdocs/../taxdocs")
        False
        >>> has_parent_traversal("../outside")
        True
    """
    normalized = os.path.normpath(folder)
    return ".." in Path(normalized).parts


def next_available_path(path: Path) -> Path:
    """
    Return ``path`` if free, else the first free ``stem_(n).ext`` sibling.

    Example:
        # with "0003_受信通知_XXXX.pdf" already on disk
        next_available_path(Path("out/0003_受信通知_XXXX.pdf"))
        # Path('out/0003_受信通知_XXXX_(1).pdf')
    """
    if not path.exists():
        return path
    base, ext = split_extension(path.name)
    counter = 1
    while True:
        candidate = path.with_name(f"{base}_({counter}){ext}")
        if not candidate.exists():
            return candidate
        counter += 1


def backup_file_name(original_name: str, now: datetime | None = None) -> str:
    """
    Prefix a basename with a filesystem-safe UTC timestamp.

    Example:
        >>> backup_file_name("a.pdf", datetime(2025, 7, 20, 13, 1, 2, 345000, tzinfo=timezone.utc))
        '2025-07-20T13-01-02-345Z_a.pdf'
    """
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    stamp = moment.strftime("%Y-%m-%dT%H-%M-%S-") + f"{moment.microsecond // 1000:03d}Z"
    return f"{stamp}_{original_name}"


def split_extension(name: str) -> tuple[str, str]:
    """
    Split a filename into (base, extension), keeping the dot in the extension.
    """
    base, dot, ext = name.rpartition(".")
    if dot == "":
        return name, ""
    if base == "":
        return "", f".{ext}"
    return base, f".{ext}"

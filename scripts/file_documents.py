from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

from taxdoc.container import build_services
from taxdoc.domain.classification import classify
from taxdoc.domain.folders import OTHER_FOLDER, resolve_folder
from taxdoc.domain.models import BatchResult
from taxdoc.domain.naming import suggest_name
from taxdoc.log_config import setup_logging
from taxdoc.settings import (
    DEFAULT_FISCAL_PERIOD,
    EXTRACT_TEXT,
    LOG_FILE,
    LOG_LEVEL,
    SQLITE_PATH,
    TARGET_FOLDER,
    WATCH_FOLDER,
)

DEMO_FILES = [
    "法人税及び地方法人税申告書_20240731テスト会社株式会社_20250720130102.pdf",
    "消費税申告書_20240731テスト会社株式会社_20250720130433.pdf",
    "東京都　法人都道府県民税・事業税・特別法人事業税又は地方法人特別税　確定申告_20240731テスト会社　株式会社_20250720133418.pdf",
    "福岡市　法人市町村民税　確定申告_20240731テスト会社　株式会社_20250720133028.pdf",
    "決算書_20250720_1535.pdf",
    "法人税　受信通知.pdf",
    "仕訳帳_20250720_1635.csv のコピー.csv",
]


def _run_demo(default_period: str | None) -> None:
    print("Demo classification:\n")
    for file_name in DEMO_FILES:
        result = classify(file_name)
        suggested = suggest_name(
            result.category,
            result.company_name,
            result.fiscal_period or default_period,
            result.prefecture,
            result.municipality,
        )
        print(file_name)
        print(f"  category:   {result.category.value} ({result.confidence:.1f})")
        print(f"  company:    {result.company_name or 'N/A'}")
        print(f"  period:     {result.fiscal_period or 'N/A'}")
        print(f"  suggested:  {suggested or '(no suggestion)'}")
        print(f"  folder:     {resolve_folder(suggested) if suggested else OTHER_FOLDER}\n")


def _print_summary(batch: BatchResult) -> None:
    total = batch.total_count
    rate = round(batch.success_count / total * 100) if total else 0
    print("\nSummary")
    print(f"  files:     {total}")
    print(f"  succeeded: {batch.success_count}")
    print(f"  failed:    {batch.failure_count}")
    print(f"  rate:      {rate}%")
    counts = batch.category_counts()
    if counts:
        print("  by folder:")
        for folder, count in counts.items():
            print(f"    {folder}: {count}")
    for result in batch.results:
        if not result.succeeded:
            print(f"  ! {Path(result.source_path).name}: {result.error_message}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Rename and file e-Tax/eLTAX documents into numbered category folders."
    )
    parser.add_argument("input", nargs="?", default=WATCH_FOLDER, help="Folder to scan.")
    parser.add_argument("output", nargs="?", default=TARGET_FOLDER, help="Target base folder.")
    parser.add_argument("--demo", action="store_true", help="Classify built-in sample names only.")
    parser.add_argument("--dry-run", action="store_true", help="Show the plan without moving files.")
    parser.add_argument("--no-backup", action="store_true", help="Skip the .backup copy.")
    parser.add_argument("--flat", action="store_true", help="Do not create category subfolders.")
    parser.add_argument("--period", default=DEFAULT_FISCAL_PERIOD, help="Fallback YYMM period.")
    parser.add_argument(
        "--extract-text",
        action="store_true",
        default=EXTRACT_TEXT,
        help="Also read PDF text to fill gaps in the filename analysis.",
    )
    parser.add_argument("--sqlite", default=SQLITE_PATH, help="Processed-file DB path.")
    args = parser.parse_args()

    setup_logging(LOG_LEVEL, LOG_FILE)

    if args.demo:
        _run_demo(args.period)
        return 0
    if not args.input or not args.output:
        parser.error("input and output folders are required")

    services = build_services(args.sqlite)
    filing = services["filing_service"]
    input_folder = str(Path(args.input).resolve())
    output_folder = str(Path(args.output).resolve())

    try:
        paths = filing.scan_folder(input_folder)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.dry_run:
        for item in filing.plan(
            paths,
            output_folder,
            create_subfolders=not args.flat,
            make_backup=not args.no_backup,
            default_fiscal_period=args.period,
            extract_text=args.extract_text,
        ):
            name = item.operation.canonical_name
            folder = resolve_folder(name) if name and not args.flat else ""
            print(f"{Path(item.path).name} -> {Path(folder, name) if name else '(skip)'}")
        return 0

    batch = filing.process_files(
        paths,
        output_folder,
        create_subfolders=not args.flat,
        make_backup=not args.no_backup,
        default_fiscal_period=args.period,
        extract_text=args.extract_text,
    )
    _print_summary(batch)
    return 0 if batch.failure_count == 0 else 2


if __name__ == "__main__":
    raise SystemExit(main())

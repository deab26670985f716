from __future__ import annotations

import argparse
import os
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

from taxdoc.adapters.sqlite_tracker import SQLiteTracker


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--sqlite", default=os.getenv("TAXDOC_SQLITE_PATH", "./taxdoc.db"))
    parser.add_argument("--forget", help="Remove one source path so it is scanned again.")
    args = parser.parse_args()

    tracker = SQLiteTracker(args.sqlite)
    if args.forget:
        tracker.forget(args.forget)
        print("Forgot:", args.forget)

    records = tracker.list_processed()
    print("DB:", args.sqlite)
    print("Processed files:", len(records))
    for record in records:
        print(f"- {record.processed_at}  {record.source_path}")
        print(f"    -> {record.destination_path or '(unknown)'}")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Rebuild a table's sorted-set indexes from its stored rows.

Repairs drift left by writes that failed half way: rows missing from an index,
stale scores, and index entries pointing at deleted rows.

Usage: python reindex_table.py users age created_at [--dry-run]
"""

import argparse
import logging
import sys

from redis_table import RedisTableError, Table
from redis_table.core.config import settings
from redis_table.services.maintenance import reindex

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def main() -> None:
    parser = argparse.ArgumentParser(description="Rebuild redis table indexes from row data")
    parser.add_argument("table", help="table name (key prefix)")
    parser.add_argument("fields", nargs="+", help="declared index fields")
    parser.add_argument("--dry-run", action="store_true", help="report drift without writing")
    args = parser.parse_args()

    if not settings.USE_REDIS:
        print("⚠ WARNING: USE_REDIS is False, reindexing the in-memory store of this process only")

    try:
        report = reindex(Table(args.table, args.fields), dry_run=args.dry_run)
    except RedisTableError as e:
        print(f"✗ Error: {e}")
        print(f"  URL: {settings.REDIS_URL}")
        sys.exit(1)

    print(f"✓ Scanned {report.rows_scanned} rows of '{report.table}'")
    print(f"  entries added:   {report.entries_added}")
    print(f"  entries removed: {report.entries_removed}")
    if report.unreadable:
        print(f"  unreadable rows: {', '.join(report.unreadable)}")
    if report.dry_run and not report.clean:
        print("⚠ Dry run: nothing written")


if __name__ == "__main__":
    main()

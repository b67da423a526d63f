#!/usr/bin/env python3
"""
Wipe all Redis data of one table.

Deletes <table>:ID, <table>:DATA and <table>:INDEX:<field> for the given fields.
Row ids restart at 1 afterwards.

Usage: python wipe_table.py users age created_at [--yes]
"""

import argparse
import sys

from redis_table import RedisTableError, Table
from redis_table.core.config import settings
from redis_table.services.maintenance import drop


def wipe_table(name: str, fields: list[str], confirm: bool = True) -> None:
    table = Table(name, fields)
    keys = [table.definition.id_key(), table.definition.data_key()]
    keys += [table.definition.index_key(f) for f in table.order_by]

    print("Keys to delete:")
    for key in keys:
        print(f"  - {key}")
    print()

    if confirm:
        response = input(f"Delete all data of table '{name}'? (yes/no): ").strip().lower()
        if response != 'yes':
            print("✗ Cancelled")
            return

    try:
        deleted = drop(table)
    except RedisTableError as e:
        print(f"✗ Error: {e}")
        print(f"  URL: {settings.REDIS_URL}")
        print("  Make sure Redis is running: docker-compose up -d redis")
        sys.exit(1)

    print(f"✓ Deleted {deleted} keys")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Delete every key of a redis table")
    parser.add_argument("table", help="table name (key prefix)")
    parser.add_argument("fields", nargs="*", help="declared index fields")
    parser.add_argument("--yes", action="store_true", help="skip the confirmation prompt")
    args = parser.parse_args()

    print("=" * 70)
    print("WIPE TABLE DATA")
    print("=" * 70)
    print()

    if not settings.USE_REDIS:
        print("⚠ WARNING: USE_REDIS is False")
        print("  This script only affects Redis when Redis is enabled")
        print()

    wipe_table(args.table, args.fields, confirm=not args.yes)

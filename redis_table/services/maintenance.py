"""
Operational tools for tables: rebuild indexes from stored rows, drop a table.
Nothing here runs as part of normal reads or writes.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List

from redis_table.core.errors import InvalidIndexValue
from redis_table.services.table import Table, decode_row, to_score

logger = logging.getLogger(__name__)


@dataclass
class ReindexReport:
    table: str
    rows_scanned: int = 0
    entries_added: int = 0
    entries_removed: int = 0
    unreadable: List[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def clean(self) -> bool:
        return not (self.entries_added or self.entries_removed or self.unreadable)


def reindex(table: Table, dry_run: bool = False) -> ReindexReport:
    """
    Bring every declared index in line with <name>:DATA.
      - rows with a value get an entry scored by it (added or rescored)
      - entries whose row is gone, unreadable or null for the field are removed
    With dry_run nothing is written; the report says what would change.
    """
    report = ReindexReport(table=table.name, dry_run=dry_run)
    expected: Dict[str, Dict[str, float]] = {f: {} for f in table.order_by}

    for member, raw in table._data().items():
        report.rows_scanned += 1
        try:
            row = decode_row(raw)
        except ValueError:
            logger.warning(f"{table.name}: row {member} is not valid JSON, leaving it unindexed")
            report.unreadable.append(member)
            continue
        for f in table.order_by:
            value = row.get(f)
            if value is None:
                continue
            try:
                expected[f][member] = float(to_score(f, value))
            except InvalidIndexValue as e:
                logger.warning(f"{table.name}: row {member} {e}")
                report.unreadable.append(member)

    for f, wanted in expected.items():
        index = table._index(f)
        current = dict(index.members())
        for member, score in wanted.items():
            if current.get(member) != score:
                report.entries_added += 1
                if not dry_run:
                    index.add(score, member)
        for member in current.keys() - wanted.keys():
            report.entries_removed += 1
            if not dry_run:
                index.remove(member)

    logger.info(
        f"{table.name}: reindex scanned {report.rows_scanned} rows, "
        f"{report.entries_added} entries added, {report.entries_removed} removed"
        + (" (dry run)" if dry_run else "")
    )
    return report


def drop(table: Table) -> int:
    """Delete the id counter, row data and every declared index. Returns keys deleted."""
    keys = [table.definition.id_key(), table.definition.data_key()]
    keys += [table.definition.index_key(f) for f in table.order_by]
    deleted = sum(1 for key in keys if table.store.delete(key))
    logger.info(f"{table.name}: dropped {deleted} keys")
    return deleted

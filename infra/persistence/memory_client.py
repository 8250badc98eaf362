"""
Simple in-memory implementation of the PersistenceClient contract.

Each operation holds one lock, so single calls are atomic the way a real
store's are; sequences of calls are not.
"""

from __future__ import annotations

import threading
from typing import Any, Mapping, Optional, Union

from api.errors import ConflictError
from api.persistence import (
    Filters,
    Order,
    PersistenceClient,
    apply_patch,
    check_columns,
    check_order,
    coerce_record,
    record_type,
)
from api.schemas.records import TABLES, UNIQUE_KEYS, Record


def _sort_key(value: Any):
    # None sorts first, like NULLS FIRST
    return (value is not None, value)


class InMemoryClient(PersistenceClient):
    """Dict-backed store: table -> id -> record. Callers always get copies, never the stored rows."""

    def __init__(self):
        self._tables: dict[str, dict[str, Record]] = {name: {} for name in TABLES}
        self._lock = threading.RLock()

    def _matches(self, row: Record, filters: Optional[Filters]) -> bool:
        return all(getattr(row, k) == v for k, v in (filters or {}).items())

    def _check_unique(self, table: str, candidate: Record, *, ignore_id: Optional[str] = None) -> None:
        rows = self._tables[table]
        if candidate.id in rows and candidate.id != ignore_id:
            raise ConflictError(f"duplicate id {candidate.id} in {table}", table=table)
        for key in UNIQUE_KEYS.get(table, []):
            wanted = tuple(getattr(candidate, c) for c in key)
            for row in rows.values():
                if row.id == ignore_id:
                    continue
                if tuple(getattr(row, c) for c in key) == wanted:
                    raise ConflictError(f"duplicate {key}={wanted} in {table}", table=table)

    def select(
        self,
        table: str,
        filters: Optional[Filters] = None,
        order: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> list[Record]:
        record_type(table)
        check_columns(table, (filters or {}).keys())
        check_order(table, order)
        with self._lock:
            rows = [r.model_copy(deep=True) for r in self._tables[table].values() if self._matches(r, filters)]
        # stable sorts applied last-key-first give a multi-column ordering
        for col, direction in reversed(list(order or [])):
            rows.sort(key=lambda r: _sort_key(getattr(r, col)), reverse=(direction == "desc"))
        if limit is not None:
            rows = rows[:limit]
        return rows

    def insert(self, table: str, record: Union[Record, Mapping[str, Any]]) -> Record:
        row = coerce_record(table, record)
        with self._lock:
            self._check_unique(table, row)
            self._tables[table][row.id] = row
        return row.model_copy(deep=True)

    def update(self, table: str, filters: Filters, patch: Mapping[str, Any]) -> int:
        record_type(table)
        check_columns(table, filters.keys())
        with self._lock:
            matched = [r for r in self._tables[table].values() if self._matches(r, filters)]
            updated = [apply_patch(table, r, patch) for r in matched]
            for row in updated:
                self._check_unique(table, row, ignore_id=row.id)
            for row in updated:
                self._tables[table][row.id] = row
        return len(matched)

    def delete(self, table: str, filters: Filters) -> int:
        record_type(table)
        check_columns(table, filters.keys())
        with self._lock:
            doomed = [r.id for r in self._tables[table].values() if self._matches(r, filters)]
            for rid in doomed:
                del self._tables[table][rid]
        return len(doomed)

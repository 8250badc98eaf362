from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Literal, Mapping, Optional, Sequence, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from api.errors import StorageError, ValidationError
from api.schemas.records import TABLES, Record

Filters = Mapping[str, Any]
Order = Sequence[tuple[str, Literal["asc", "desc"]]]


class PersistenceClient(ABC):
    """
    Store-agnostic query contract the services depend on.

    Every table is one of `api.schemas.records.TABLES`; rows go in and come out
    as the matching record type. `filters` is column -> required value
    (equality only). Implementations raise `api.errors.StorageError` (or a
    subclass) for anything the store reports and never return partial results.
    Infrastructure (SQLAlchemy, in-memory) implements it under `infra.persistence`.
    """

    @abstractmethod
    def select(
        self,
        table: str,
        filters: Optional[Filters] = None,
        order: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> list[Record]:
        raise NotImplementedError

    @abstractmethod
    def insert(self, table: str, record: Union[Record, Mapping[str, Any]]) -> Record:
        """
        Insert one row and return it as stored (ids and timestamps filled in).

        Raises `ConflictError` when a unique key is already taken.
        """

        raise NotImplementedError

    @abstractmethod
    def update(self, table: str, filters: Filters, patch: Mapping[str, Any]) -> int:
        """Apply `patch` to every row matching `filters`; returns how many rows matched."""

        raise NotImplementedError

    @abstractmethod
    def delete(self, table: str, filters: Filters) -> int:
        raise NotImplementedError

    def select_one(self, table: str, filters: Filters) -> Optional[Record]:
        """Zero-or-one lookup; more than one match is a ValidationError."""
        rows = self.select(table, filters, limit=2)
        if len(rows) > 1:
            raise ValidationError(f"expected at most one row in {table} for {dict(filters)}", table=table)
        return rows[0] if rows else None


def record_type(table: str) -> type[Record]:
    try:
        return TABLES[table]
    except KeyError:
        raise ValidationError(f"unknown table {table!r}", table=table) from None


def check_columns(table: str, columns) -> None:
    known = record_type(table).model_fields
    unknown = [c for c in columns if c not in known]
    if unknown:
        raise ValidationError(f"unknown column(s) {unknown} for {table}", table=table)


def check_order(table: str, order: Optional[Order]) -> None:
    check_columns(table, [col for col, _ in order or []])
    bad = [direction for _, direction in order or [] if direction not in ("asc", "desc")]
    if bad:
        raise ValidationError(f"order direction must be 'asc' or 'desc', got {bad} for {table}", table=table)


def load_row(table: str, obj: Any) -> Record:
    """Validate a row read back from the store; a row that no longer fits its record type is a storage fault."""
    try:
        return record_type(table).model_validate(obj)
    except PydanticValidationError as e:
        raise StorageError(f"stored {table} row is invalid: {e.errors(include_url=False)}", table=table) from e


def coerce_record(table: str, record: Union[BaseModel, Mapping[str, Any]]) -> Record:
    """Validate an incoming row against the table's record type."""
    model = record_type(table)
    data = record.model_dump() if isinstance(record, BaseModel) else dict(record)
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"invalid {table} row: {e.errors(include_url=False)}", table=table) from e


def apply_patch(table: str, row: Record, patch: Mapping[str, Any]) -> Record:
    check_columns(table, patch.keys())
    if "id" in patch and patch["id"] != row.id:
        raise ValidationError(f"cannot change primary key of {table} row", table=table)
    return coerce_record(table, {**row.model_dump(), **patch})

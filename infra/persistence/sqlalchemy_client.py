from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from sqlalchemy import update as sa_update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from api.errors import AppError, ConflictError, StorageError
from api.models.models import CodeGeneration, LearningProgress, Quiz, QuizAttempt, QuizQuestion
from api.persistence import (
    Filters,
    Order,
    PersistenceClient,
    apply_patch,
    check_columns,
    check_order,
    coerce_record,
    load_row,
    record_type,
)
from api.schemas.records import Record
from api.utils.logger import configure_logging

logger = configure_logging()

ORM_TABLES = {
    "quizzes": Quiz,
    "quiz_questions": QuizQuestion,
    "quiz_attempts": QuizAttempt,
    "learning_progress": LearningProgress,
    "code_generations": CodeGeneration,
}


@dataclass
class SqlAlchemyClient(PersistenceClient):
    """
    PersistenceClient over a SQLAlchemy session.

    - Each write commits on success and rolls back on failure.
    - `IntegrityError` becomes `ConflictError`; any other SQLAlchemy error becomes `StorageError`.
    - `update` runs one UPDATE whose WHERE clause is the full filter set, so a
      filter on `version` makes the write conditional at the database.
    """

    db: Session

    def _model(self, table: str):
        record_type(table)
        return ORM_TABLES[table]

    def _fail(self, table: str, op: str, e: SQLAlchemyError):
        self.db.rollback()
        if isinstance(e, IntegrityError):
            logger.warning("storage conflict table=%s op=%s error=%s", table, op, e.orig)
            raise ConflictError(f"{op} on {table} violated a constraint", table=table) from e
        logger.error("storage error table=%s op=%s error=%s", table, op, e)
        raise StorageError(f"{op} on {table} failed", table=table) from e

    def select(
        self,
        table: str,
        filters: Optional[Filters] = None,
        order: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> list[Record]:
        model = self._model(table)
        check_columns(table, (filters or {}).keys())
        check_order(table, order)
        try:
            q = self.db.query(model).populate_existing().filter_by(**(filters or {}))
            for col, direction in order or []:
                column = getattr(model, col)
                q = q.order_by(column.desc() if direction == "desc" else column.asc())
            if limit is not None:
                q = q.limit(limit)
            rows = q.all()
        except SQLAlchemyError as e:
            self._fail(table, "select", e)
        return [load_row(table, r) for r in rows]

    def insert(self, table: str, record: Union[Record, Mapping[str, Any]]) -> Record:
        model = self._model(table)
        row = coerce_record(table, record)
        try:
            obj = model(**row.model_dump())
            self.db.add(obj)
            self.db.commit()
            self.db.expunge(obj)
        except SQLAlchemyError as e:
            self._fail(table, "insert", e)
        return row

    def update(self, table: str, filters: Filters, patch: Mapping[str, Any]) -> int:
        model = self._model(table)
        check_columns(table, filters.keys())
        check_columns(table, patch.keys())
        try:
            current = self.db.query(model).populate_existing().filter_by(**filters).first()
            if current is None:
                self.db.rollback()
                return 0
            validated = apply_patch(table, load_row(table, current), patch).model_dump()
            values = {k: validated[k] for k in patch}
            stmt = sa_update(model).filter_by(**filters).values(**values)
            result = self.db.execute(stmt.execution_options(synchronize_session=False))
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail(table, "update", e)
        except AppError:
            self.db.rollback()
            raise
        return int(result.rowcount or 0)

    def delete(self, table: str, filters: Filters) -> int:
        model = self._model(table)
        check_columns(table, filters.keys())
        try:
            count = self.db.query(model).filter_by(**filters).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail(table, "delete", e)
        return int(count)

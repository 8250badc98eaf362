"""
Migration: optimistic concurrency for learning progress.

- learning_progress: add version (INTEGER NOT NULL DEFAULT 1).
- learning_progress: add updated_at (DATETIME), backfilled to the migration time
  for existing rows.

Databases created by create_db() after this change already have both columns.
"""

import os
import sqlite3
from typing import Optional

COLUMNS = [
    ("version", "INTEGER NOT NULL DEFAULT 1"),
    ("updated_at", "DATETIME"),
]


def run_migration(db_path: Optional[str] = None):
    if db_path is None:
        db_path = os.getenv("DATABASE_URL", "sqlite:///./codementor.db").replace("sqlite:///", "")
    conn = None
    try:
        conn = sqlite3.connect(db_path)
        cursor = conn.cursor()

        cursor.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='learning_progress'"
        )
        if not cursor.fetchone():
            print("learning_progress table not found. Skipping.")
            return

        for name, ddl in COLUMNS:
            try:
                cursor.execute(f"ALTER TABLE learning_progress ADD COLUMN {name} {ddl}")
                print(f"learning_progress: added {name}")
            except sqlite3.OperationalError as e:
                if "duplicate column" in str(e).lower():
                    print(f"learning_progress.{name} already exists. Skipping.")
                else:
                    raise

        cursor.execute(
            "UPDATE learning_progress SET version = 1 WHERE version IS NULL"
        )
        cursor.execute(
            "UPDATE learning_progress SET updated_at = CURRENT_TIMESTAMP WHERE updated_at IS NULL"
        )
        print(f"learning_progress: backfilled {cursor.rowcount} row(s)")

        conn.commit()
        print("Migration add_progress_version completed successfully!")

    except sqlite3.Error as e:
        print(f"Error during migration: {e}")
        if conn:
            conn.rollback()
        raise
    finally:
        if conn:
            conn.close()


if __name__ == "__main__":
    run_migration()

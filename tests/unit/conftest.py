"""
Unit test fixtures. Services run against the in-memory persistence client; no real DB.
"""
import pytest

from api.errors import StorageError
from infra.persistence.memory_client import InMemoryClient


class InterleavingClient(InMemoryClient):
    """
    In-memory client that runs a hook right after the first read of a table.

    Simulates a concurrent writer landing between another writer's read and
    its write.
    """

    def __init__(self, table: str = "learning_progress"):
        super().__init__()
        self.table = table
        self.after_first_read = None

    def select(self, table, filters=None, order=None, limit=None):
        rows = super().select(table, filters, order, limit)
        if table == self.table and self.after_first_read is not None:
            hook, self.after_first_read = self.after_first_read, None
            hook()
        return rows


class FailingClient(InMemoryClient):
    """In-memory client whose chosen operations raise StorageError."""

    def __init__(self, fail_on: set[str]):
        super().__init__()
        self.fail_on = fail_on
        self.writes = 0

    def select(self, table, filters=None, order=None, limit=None):
        if "select" in self.fail_on:
            raise StorageError("connection reset", table=table)
        return super().select(table, filters, order, limit)

    def insert(self, table, record):
        if "insert" in self.fail_on:
            raise StorageError("permission denied", table=table)
        self.writes += 1
        return super().insert(table, record)

    def update(self, table, filters, patch):
        if "update" in self.fail_on:
            raise StorageError("permission denied", table=table)
        self.writes += 1
        return super().update(table, filters, patch)


@pytest.fixture
def interleaving_client():
    return InterleavingClient()


@pytest.fixture
def failing_client():
    """Factory: failing_client({"update"}) -> client whose updates raise StorageError."""
    return FailingClient

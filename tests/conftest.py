"""Shared fixtures for tracker tests."""

from __future__ import annotations

from datetime import date

import pytest

from database.manager import MemoryDocumentStore
from services.auth import AuthProvider
from services.tracker_session import TrackerSession

TODAY = date(2024, 1, 10)


class FailingWriteStore(MemoryDocumentStore):
    """Memory store whose writes can be switched to fail."""

    def __init__(self, documents=None):
        super().__init__(documents)
        self.fail_writes = False

    def _write(self, user_id, document):
        if self.fail_writes:
            from database.manager import DatabaseWriteError
            raise DatabaseWriteError("disk full")
        super()._write(user_id, document)


@pytest.fixture
def memory_store() -> FailingWriteStore:
    return FailingWriteStore()


@pytest.fixture
def session(memory_store: FailingWriteStore) -> TrackerSession:
    return TrackerSession(
        memory_store,
        auth=AuthProvider("alice"),
        today_provider=lambda: TODAY,
    )

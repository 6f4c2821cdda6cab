"""
Pytest configuration and shared fakes.

Adds the project root to the Python path so tests can import api, domain,
repositories, and services without installing the package.
"""

import sys
import threading
from pathlib import Path
from typing import List, Optional

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from repositories.errors import SinkError  # noqa: E402


class FakeLedger:
    """Records appended rows; raises SinkError when `fail` is set."""

    def __init__(self, fail: bool = False, barrier: Optional[threading.Barrier] = None) -> None:
        self.fail = fail
        self.barrier = barrier
        self.rows: List[List[str]] = []
        self._lock = threading.Lock()

    def append_row(self, row: List[str]) -> None:
        if self.barrier is not None:
            self.barrier.wait()
        with self._lock:
            self.rows.append(list(row))
        if self.fail:
            raise SinkError("failed to append row to sheet: quota exceeded")


class FakeNotifier:
    """Records sent messages; raises SinkError when `fail` is set."""

    def __init__(self, fail: bool = False, barrier: Optional[threading.Barrier] = None) -> None:
        self.fail = fail
        self.barrier = barrier
        self.messages: List[str] = []
        self._lock = threading.Lock()

    def send_message(self, text: str) -> None:
        if self.barrier is not None:
            self.barrier.wait()
        with self._lock:
            self.messages.append(text)
        if self.fail:
            raise SinkError("failed to send Telegram message: chat not found")


@pytest.fixture
def ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()

# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from app import TodoApp
from storage import Storage
from task_list import TaskList
from view import Notifier


class FakeTimer:
    """
    Stand-in for threading.Timer: never fires on its own.

    Tests call fire() to simulate the delay elapsing.
    """

    def __init__(self, interval: float, function) -> None:
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if not self.cancelled:
            self.function()


class TimerRecorder:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval: float, function) -> FakeTimer:
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer


@pytest.fixture()
def storage(tmp_path: Path) -> Storage:
    return Storage(tmp_path / "data")


@pytest.fixture()
def timers() -> TimerRecorder:
    return TimerRecorder()


@pytest.fixture()
def notifier(timers: TimerRecorder) -> Notifier:
    return Notifier(delay=2.0, timer_factory=timers)


@pytest.fixture()
def task_list(storage: Storage) -> TaskList:
    return TaskList(storage)


@pytest.fixture()
def app(storage: Storage, notifier: Notifier) -> TodoApp:
    return TodoApp(storage, notifier=notifier)

"""Ephemeral UI state: active filter, edit session and the toast message.

Nothing here is persisted. The Notifier clears its message after a fixed
delay; a new notification cancels the previous pending clear so the newest
message always stays up for the full delay.
"""
from __future__ import annotations
import functools
import logging
import threading
from typing import Callable, Optional

from models import DEFAULT_FILTER, FILTERS

logger = logging.getLogger(__name__)

TOAST_SECONDS = 2.0

TimerFactory = Callable[[float, Callable[[], None]], "threading.Timer"]


class ViewState:
    def __init__(self, filter_mode: str = DEFAULT_FILTER):
        self.filter: str = DEFAULT_FILTER
        self.set_filter(filter_mode)
        self.editing_id: Optional[int] = None
        self.draft: str = ''

    def set_filter(self, mode: str) -> None:
        if mode not in FILTERS:
            raise ValueError(f'Invalid filter: {mode}')
        self.filter = mode

    # ---- edit session ----
    def start_edit(self, task_id: int, text: str) -> None:
        self.editing_id = task_id
        self.draft = text

    def update_draft(self, text: str) -> None:
        self.draft = text

    def close_edit(self) -> None:
        self.editing_id = None
        self.draft = ''

    @property
    def editing(self) -> bool:
        return self.editing_id is not None


class Notifier:
    """Transient message with a self-clearing timer."""

    def __init__(self, delay: float = TOAST_SECONDS, timer_factory: Optional[TimerFactory] = None):
        self.delay = delay
        self._timer_factory = timer_factory or threading.Timer
        self._lock = threading.Lock()
        self._timer = None
        self._generation = 0
        self.message: str = ''

    def notify(self, message: str) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = self._timer_factory(self.delay, functools.partial(self._expire, self._generation))
            timer.daemon = True
            self.message = message
            self._timer = timer
        timer.start()
        logger.debug("notify: %s", message)

    def _expire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self.message = ''
            self._timer = None

    def clear(self) -> None:
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self.message = ''

    def shutdown(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

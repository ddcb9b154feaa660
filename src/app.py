"""Application facade: the single surface the presentation layer talks to.

Commands flow in (add, toggle, edit, delete, clear, filter, theme); state
flows out (rows, counts, summary, message, theme). Domain state lives in
TaskList and is persisted on every change; everything else lives in the
ephemeral ViewState / Notifier.
"""
import logging
from typing import List, Optional

from models import DEFAULT_PRIORITY, TaskRow
from storage import Storage
from task_list import TaskList
from view import Notifier, ViewState

logger = logging.getLogger(__name__)

MSG_ADDED = "✅ Task Added!"
MSG_UPDATED = "✏️ Task Updated!"
MSG_DELETED = "\U0001F5D1️ Task Deleted!"
MSG_CLEARED = "\U0001F9F9 Cleared Completed!"


class TodoApp:
    def __init__(self, storage: Storage, notifier: Optional[Notifier] = None, view: Optional[ViewState] = None):
        self.storage: Storage = storage
        self.tasks: TaskList = TaskList(storage)
        self.view: ViewState = view or ViewState()
        self.notifier: Notifier = notifier or Notifier()
        self.dark: bool = storage.load_theme()

    # -------------------- commands --------------------
    def add(self, text: str, priority: str = DEFAULT_PRIORITY) -> bool:
        if self.tasks.add(text, priority) is None:
            return False
        self.notifier.notify(MSG_ADDED)
        return True

    def toggle_complete(self, task_id: int) -> bool:
        return self.tasks.toggle_complete(task_id)

    def start_edit(self, task_id: int) -> bool:
        task = self.tasks.find(task_id)
        if task is None:
            return False
        self.view.start_edit(task_id, task.text)
        return True

    def save_edit(self, new_text: Optional[str] = None) -> bool:
        """Commit the draft (or new_text); the edit session closes either way."""
        task_id = self.view.editing_id
        text = self.view.draft if new_text is None else new_text
        self.view.close_edit()
        if task_id is None or not self.tasks.edit(task_id, text):
            return False
        self.notifier.notify(MSG_UPDATED)
        return True

    def cancel_edit(self) -> None:
        self.view.close_edit()

    def delete(self, task_id: int) -> bool:
        if not self.tasks.delete(task_id):
            return False
        if self.view.editing_id == task_id:
            self.view.close_edit()
        self.notifier.notify(MSG_DELETED)
        return True

    def clear_completed(self) -> int:
        removed = self.tasks.clear_completed()
        if self.view.filter == 'done':
            self.view.set_filter('active')
        self.notifier.notify(MSG_CLEARED)
        return removed

    def set_filter(self, mode: str) -> None:
        self.view.set_filter(mode)

    def set_theme(self, dark: bool) -> None:
        self.dark = bool(dark)
        self.storage.save_theme(self.dark)
        logger.debug("Theme set to %s", 'dark' if self.dark else 'light')

    def toggle_theme(self) -> None:
        self.set_theme(not self.dark)

    # -------------------- state reads --------------------
    def rows(self) -> List[TaskRow]:
        return self.tasks.rows(self.view.filter)

    @property
    def active_count(self) -> int:
        return self.tasks.active_count

    def summary(self) -> str:
        return self.tasks.summary()

    @property
    def message(self) -> str:
        return self.notifier.message

    @property
    def filter(self) -> str:
        return self.view.filter

    @property
    def editing_id(self) -> Optional[int]:
        return self.view.editing_id

    def close(self) -> None:
        self.notifier.shutdown()

"""Task list logic: canonical ordering, id management, mutations and views.

The canonical sequence is insertion order. Everything the UI shows is a
derived view (filter, then stable sort by priority) rebuilt on every read.
Tasks are addressed by a process-local id so a row picked from a sorted
view always reaches the right task, even when two tasks look identical.
"""
import logging
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from models import (DEFAULT_PRIORITY, FILTERS, PRIORITIES, PRIORITY_RANK,
                    Task, TaskRow)
from storage import Storage

logger = logging.getLogger(__name__)

SUMMARY_EMPTY = "All clear! \U0001F60C"
SUMMARY_ALL_DONE = "All tasks done! \U0001F389"


class TaskList:
    def __init__(self, storage: Storage, entries: Optional[Iterable[Mapping[str, Any]]] = None):
        self.storage: Storage = storage
        self.tasks: List[Task] = []
        self._next_id: int = 1
        if entries is None:
            entries = storage.load_tasks()
        self._load(entries)
        logger.info("Task list ready: %d tasks (%d active)", len(self.tasks), self.active_count)

    # -------------------- loading --------------------
    def _load(self, entries: Iterable[Mapping[str, Any]]) -> None:
        """Entries are expected clean, as returned by Storage.load_tasks."""
        for raw in entries:
            self.tasks.append(Task(
                id=self._allocate_id(),
                text=raw['text'],
                priority=raw['priority'],
                completed=raw['completed'],
            ))

    # -------------------- id management --------------------
    def _allocate_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    def find(self, task_id: int) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def position_of(self, task_id: int) -> Optional[int]:
        """Canonical index of a task, or None if the id is unknown."""
        for pos, task in enumerate(self.tasks):
            if task.id == task_id:
                return pos
        return None

    # -------------------- task operations --------------------
    def add(self, text: str, priority: str = DEFAULT_PRIORITY) -> Optional[Task]:
        if priority not in PRIORITIES:
            raise ValueError(f'Invalid priority: {priority}')
        text = text.strip()
        if not text:
            return None
        task = Task(id=self._allocate_id(), text=text, priority=priority)
        self.tasks.append(task)
        self._persist()
        logger.debug("Added task %d (%s)", task.id, priority)
        return task

    def toggle_complete(self, task_id: int) -> bool:
        task = self._lookup(task_id, 'toggle')
        if task is None:
            return False
        task.completed = not task.completed
        self._persist()
        return True

    def edit(self, task_id: int, new_text: str) -> bool:
        task = self._lookup(task_id, 'edit')
        if task is None:
            return False
        new_text = new_text.strip()
        if not new_text:
            return False
        task.text = new_text
        self._persist()
        return True

    def delete(self, task_id: int) -> bool:
        pos = self.position_of(task_id)
        if pos is None:
            logger.debug("delete: no task with id %s", task_id)
            return False
        del self.tasks[pos]
        self._persist()
        return True

    def clear_completed(self) -> int:
        """Drop completed tasks, keeping the order of the rest. Returns count removed."""
        remaining = [t for t in self.tasks if not t.completed]
        removed = len(self.tasks) - len(remaining)
        self.tasks = remaining
        self._persist()
        logger.debug("Cleared %d completed tasks", removed)
        return removed

    def _lookup(self, task_id: int, action: str) -> Optional[Task]:
        task = self.find(task_id)
        if task is None:
            logger.debug("%s: no task with id %s", action, task_id)
        return task

    def _persist(self) -> None:
        self.storage.save_tasks(self.get_tasks())

    # -------------------- derived views --------------------
    def filtered(self, mode: str) -> List[Task]:
        if mode == 'active':
            return [t for t in self.tasks if not t.completed]
        if mode == 'done':
            return [t for t in self.tasks if t.completed]
        if mode == 'all':
            return list(self.tasks)
        raise ValueError(f'Invalid filter: {mode}; expected one of {", ".join(FILTERS)}')

    def view(self, mode: str) -> List[Task]:
        # sorted() is stable: equal priorities keep canonical order
        return sorted(self.filtered(mode), key=lambda t: PRIORITY_RANK[t.priority])

    def rows(self, mode: str) -> List[TaskRow]:
        positions = {t.id: pos for pos, t in enumerate(self.tasks)}
        return [TaskRow(t.text, t.icon, t.completed, positions[t.id], t.id, t.priority) for t in self.view(mode)]

    @property
    def active_count(self) -> int:
        return sum(1 for t in self.tasks if not t.completed)

    def summary(self) -> str:
        if not self.tasks:
            return SUMMARY_EMPTY
        active = self.active_count
        if active == 0:
            return SUMMARY_ALL_DONE
        plural = 's' if active > 1 else ''
        return f"You have {active} task{plural} left. Let’s go! \U0001F680"

    # -------------------- serialization --------------------
    def get_tasks(self) -> List[Dict[str, Any]]:
        return [t.to_dict() for t in self.tasks]

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self.tasks))

    def __str__(self) -> str:
        return f'Tasks: {len(self.tasks)} total, {self.active_count} active'

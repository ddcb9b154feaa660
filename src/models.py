"""Data models for the terminal to-do list.

Priorities and filters are plain string keys so the persisted JSON stays
readable and matches what the UI offers: "urgent", "normal", "chill".
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, NamedTuple, Tuple

PRIORITIES: Tuple[str, ...] = ("urgent", "normal", "chill")
DEFAULT_PRIORITY = "normal"
PRIORITY_RANK: Dict[str, int] = {"urgent": 0, "normal": 1, "chill": 2}
PRIORITY_ICONS: Dict[str, str] = {"urgent": "\U0001F525", "normal": "\U0001F4CC", "chill": "\U0001F9D8"}

FILTERS: Tuple[str, ...] = ("all", "active", "done")
DEFAULT_FILTER = "active"


@dataclass
class Task:
    """A single to-do entry.

    Fields:
        id: Process-local identifier (reassigned on load, never persisted).
        text: Trimmed, non-empty task text.
        priority: One of PRIORITIES.
        completed: True once ticked off.
    """
    id: int
    text: str
    priority: str = DEFAULT_PRIORITY
    completed: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {"text": self.text, "priority": self.priority, "completed": self.completed}

    @property
    def icon(self) -> str:
        return PRIORITY_ICONS.get(self.priority, PRIORITY_ICONS[DEFAULT_PRIORITY])


class TaskRow(NamedTuple):
    """One displayed line of the derived view."""
    text: str
    icon: str
    completed: bool
    position: int
    id: int
    priority: str = DEFAULT_PRIORITY

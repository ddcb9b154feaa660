"""Persistence helpers: a tiny key-value store backed by files.

Each logical key maps to one text file in the data directory, much like a
browser's local storage: "tasks" holds a JSON array, "theme" holds the tag
"dark" or "light". Malformed content never raises; it falls back to the
empty list / light theme.
"""
import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from models import DEFAULT_PRIORITY, PRIORITIES

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent.parent / 'data'
KEY_FILES: Dict[str, str] = {'tasks': 'tasks.json', 'theme': 'theme'}

TaskEntry = Dict[str, Any]


class Storage:
    def __init__(self, data_dir: Union[str, Path, None] = None):
        self.data_dir = Path(data_dir) if data_dir is not None else DEFAULT_DATA_DIR

    def path_for(self, key: str) -> Path:
        if key not in KEY_FILES:
            raise KeyError(f'Unknown storage key: {key}')
        return self.data_dir / KEY_FILES[key]

    # -------------------- raw key access --------------------
    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError):
            logger.warning("Unreadable store entry %s at %s", key, path, exc_info=True)
            return None

    def set_item(self, key: str, value: str) -> None:
        """Overwrite a key atomically (temp file + rename)."""
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f'.{path.name}.', dir=str(path.parent))
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(value)
            os.replace(tmp, path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp)
            raise

    # -------------------- tasks --------------------
    def load_tasks(self) -> List[TaskEntry]:
        """Load task entries; absent or malformed data yields an empty list."""
        raw = self.get_item('tasks')
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("Malformed tasks data in %s; starting empty", self.path_for('tasks'))
            return []
        if not isinstance(data, list):
            logger.warning("Tasks data is %s, expected a list; starting empty", type(data).__name__)
            return []
        entries: List[TaskEntry] = []
        for raw_entry in data:
            entry = _sanitize(raw_entry)
            if entry is None:
                logger.debug("Dropping malformed task entry: %r", raw_entry)
                continue
            entries.append(entry)
        return entries

    def save_tasks(self, tasks: List[TaskEntry]) -> None:
        """Persist the full task list (pretty-printed), replacing the old value."""
        self.set_item('tasks', json.dumps(tasks, indent=4, ensure_ascii=False))
        logger.debug("Saved %d tasks", len(tasks))

    # -------------------- theme --------------------
    def load_theme(self) -> bool:
        raw = self.get_item('theme')
        return raw is not None and raw.strip() == 'dark'

    def save_theme(self, dark: bool) -> None:
        self.set_item('theme', 'dark' if dark else 'light')


def _sanitize(raw: Any) -> Optional[TaskEntry]:
    """Normalize one stored entry; None when it cannot be a task."""
    if not isinstance(raw, dict):
        return None
    text = raw.get('text')
    if not isinstance(text, str) or not text.strip():
        return None
    priority = raw.get('priority')
    if priority not in PRIORITIES:
        priority = DEFAULT_PRIORITY
    return {'text': text.strip(), 'priority': priority, 'completed': raw.get('completed') is True}

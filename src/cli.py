"""Command-line interface loop for the to-do list.

Row numbers typed by the user refer to the view rendered just before the
prompt (filtered and priority-sorted); they are mapped to task ids so the
right task is touched regardless of sorting.
"""
import logging
from typing import List, Optional

from app import TodoApp
from models import DEFAULT_PRIORITY, FILTERS, TaskRow
from theme import BOLD, STRIKE, color, palette

logger = logging.getLogger(__name__)

# --- terminal control helpers ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home); 3J first
# is more reliable in some terminals.
def _clear_screen() -> None:
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


def _rest(line: str, skip: int) -> str:
    """Text after the first `skip` tokens, inner spacing kept."""
    parts = line.split(None, skip)
    return parts[skip] if len(parts) > skip else ''


PRIORITY_FLAGS = {
    '-u': 'urgent',
    '--urgent': 'urgent',
    '-n': 'normal',
    '--normal': 'normal',
    '-c': 'chill',
    '--chill': 'chill',
}

FILTER_ALIASES = {
    'a': 'all',
    'all': 'all',
    'ac': 'active',
    'active': 'active',
    'd': 'done',
    'done': 'done',
}

FILTER_LABELS = {'all': '\U0001F480 All', 'active': '\U0001F195 Active', 'done': '✅ Done'}
EMPTY_VIEW = "✨ Nothing here. Manifesting productivity..."
TITLE = "To-Do's"


class CLI:
    def __init__(self, app: TodoApp, alt_screen: bool = True):
        self.app: TodoApp = app
        self.alt_screen: bool = alt_screen
        self._rows: List[TaskRow] = []
        self._notice: str = ''

    def run(self) -> None:
        """Main REPL loop; the screen is cleared and redrawn each cycle."""
        exit_message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                _clear_screen()
                self.display()
                line = input("\n: ").strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return to the list...")
                    continue
                if lower in ('exit', 'quit', 'q'):
                    exit_message = "Goodbye."
                    break
                self.handle_command(line)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            self.app.close()
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    # -------------------- rendering --------------------
    def render(self) -> List[str]:
        """Build the screen as lines and remember the rows they number."""
        pal = palette(self.app.dark)
        self._rows = self.app.rows()
        mode_icon = '\U0001F319' if self.app.dark else '☀️'
        lines = [
            f"{color(TITLE, pal['header'], BOLD)}  {mode_icon}",
            color(self.app.summary(), pal['muted']),
            '',
            '  '.join(color(f'[{FILTER_LABELS[f]}]', pal['header'], BOLD) if f == self.app.filter
                      else color(f' {FILTER_LABELS[f]} ', pal['muted']) for f in FILTERS),
            '',
        ]
        if not self._rows:
            lines.append(color(EMPTY_VIEW, pal['muted']))
        for n, row in enumerate(self._rows, start=1):
            if row.completed:
                body = color(f"✓ {row.text}", pal['done'], STRIKE)
            else:
                body = color(row.text, pal[row.priority])
            marker = ' *' if row.id == self.app.editing_id else ''
            lines.append(f"{color(f'{n}.', pal['header'], BOLD)} {row.icon} {body}{marker}")
        if self.app.message:
            lines.append('')
            lines.append(color(self.app.message, pal['toast'], BOLD))
        if self._notice:
            lines.append('')
            lines.append(self._notice)
            self._notice = ''
        return lines

    def display(self) -> None:
        print('\n'.join(self.render()))

    def _warn(self, message: str) -> None:
        """Queue a one-off line shown under the next redraw."""
        self._notice = message.strip()

    def _row_id(self, raw: str) -> Optional[int]:
        raw = raw.rstrip('.')
        if not raw.isdigit():
            self._warn("Invalid number.")
            return None
        idx = int(raw) - 1
        if idx < 0 or idx >= len(self._rows):
            self._warn(f"No task #{raw} in this view.")
            return None
        return self._rows[idx].id

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> None:
        tokens = line.split()
        if not tokens:
            return
        cmd = tokens[0].lower()
        try:
            if cmd in ('add', 'a'):
                self._cmd_add(line, tokens)
            elif cmd in ('t', 'done', 'toggle'):
                self._cmd_toggle(tokens)
            elif cmd in ('e', 'edit'):
                self._cmd_edit(line, tokens)
            elif cmd in ('rm', 'del', 'delete'):
                self._cmd_rm(tokens)
            elif cmd == 'clear':
                self.app.clear_completed()
            elif cmd in ('f', 'filter'):
                self._cmd_filter(tokens)
            elif cmd == 'theme':
                self.app.toggle_theme()
            else:
                self._warn("Unknown command. Type 'help' for instructions.")
        except OSError as exc:
            logger.exception("Saving failed for command %r", cmd)
            self._warn(f"Could not save: {exc}")

    # ---- individual command helpers ----
    def _cmd_add(self, line: str, tokens: List[str]) -> None:
        skip = 1
        priority = DEFAULT_PRIORITY
        if len(tokens) > 1 and tokens[1].lower() in PRIORITY_FLAGS:
            priority = PRIORITY_FLAGS[tokens[1].lower()]
            skip = 2
        text = _rest(line, skip)  # inline shorthand
        if not text:
            text = input("Enter task: ")
            if not tokens[1:]:
                raw = input("Priority (u/n/c) [n]: ").strip().lower()
                priority = PRIORITY_FLAGS.get(f'-{raw[:1]}', DEFAULT_PRIORITY) if raw else DEFAULT_PRIORITY
        if not self.app.add(text, priority):
            self._warn("Task text required.")

    def _cmd_toggle(self, tokens: List[str]) -> None:
        if len(tokens) != 2:
            self._warn("Usage: t <n>")
            return
        task_id = self._row_id(tokens[1])
        if task_id is not None:
            self.app.toggle_complete(task_id)

    def _cmd_edit(self, line: str, tokens: List[str]) -> None:
        if len(tokens) < 2:
            self._warn("Usage: e <n> [new text]")
            return
        task_id = self._row_id(tokens[1])
        if task_id is None or not self.app.start_edit(task_id):
            return
        if len(tokens) > 2:
            self.app.save_edit(_rest(line, 2))
            return
        print(f"Current: {self.app.view.draft}")
        self.app.save_edit(input("New text (blank cancels): "))

    def _cmd_rm(self, tokens: List[str]) -> None:
        if len(tokens) != 2:
            self._warn("Usage: rm <n>")
            return
        task_id = self._row_id(tokens[1])
        if task_id is not None:
            self.app.delete(task_id)

    def _cmd_filter(self, tokens: List[str]) -> None:
        mode = FILTER_ALIASES.get(tokens[1].lower()) if len(tokens) == 2 else None
        if mode is None:
            self._warn("Usage: f <all|active|done>; aliases: a, ac, d")
            return
        self.app.set_filter(mode)

    # -------------------- help --------------------
    def _help(self) -> None:
        print("Commands:")
        print("  add [-u|-n|-c] <text>  Add a task (urgent/normal/chill; default normal)")
        print("  add                    Add a task (prompts for text and priority)")
        print("  t <n>                  Toggle task n done/not done")
        print("  e <n> [text]           Edit task n (prompts when text omitted; blank cancels)")
        print("  rm <n>                 Delete task n")
        print("  clear                  Remove all completed tasks")
        print("  f <all|active|done>    Filter the list; aliases: a, ac, d")
        print("  theme                  Toggle light/dark mode")
        print("  help                   Show this help (press Enter to return)")
        print("  exit                   Quit (everything is saved as you go)")

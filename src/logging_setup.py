"""Logging setup: everything to a file, only warnings to the console.

The REPL redraws the whole screen every cycle, so chatty console output
would be wiped anyway; the file log keeps the detail.
"""
from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Union


def setup_logging(
    *,
    log_dir: Union[str, Path],
    file_level: Union[int, str] = logging.DEBUG,
    console_level: int = logging.WARNING,
) -> Path:
    """Configure the root logger once, early. Returns the log file path."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "todo.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file

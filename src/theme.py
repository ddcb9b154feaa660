"""Color & style helpers for the light and dark display modes.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Palette hex values can be overridden via environment or project .env
  (TODO_LIGHT_URGENT, TODO_DARK_HEADER, ...).
"""
from __future__ import annotations
import os, sys
from typing import Dict, Mapping, Optional

from config import read_env_file

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    return f"\033[38;5;{16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)}m"

def from_hex(hex_code: str) -> str:
    """Convert a hex color code to an ANSI foreground sequence."""
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)

def is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

RESET = _code('0')
BOLD = _code('1')
STRIKE = _code('9')

ROLES = ('header', 'urgent', 'normal', 'chill', 'done', 'muted', 'toast')

# Light mode mirrors the indigo/pink look; dark mode goes greyer.
DEFAULT_HEX: Dict[str, Dict[str, str]] = {
    'light': {
        'header': '#4F46E5', 'urgent': '#DC2626', 'normal': '#7C3AED',
        'chill': '#0D9488', 'done': '#6B7280', 'muted': '#9CA3AF', 'toast': '#DB2777',
    },
    'dark': {
        'header': '#E5E7EB', 'urgent': '#F87171', 'normal': '#C4B5FD',
        'chill': '#5EEAD4', 'done': '#6B7280', 'muted': '#4B5563', 'toast': '#F472B6',
    },
}


# .env overrides are read once, like the color switches above
_ENV_OVERRIDES: Dict[str, str] = read_env_file()


def palette(dark: bool, env: Optional[Mapping[str, str]] = None,
            overrides: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Resolve ANSI sequences per role (priority: real env var > .env > default)."""
    mode = 'dark' if dark else 'light'
    if overrides is None:
        overrides = _ENV_OVERRIDES
    if env is None:
        env = os.environ
    resolved: Dict[str, str] = {}
    for role in ROLES:
        key = f"TODO_{mode.upper()}_{role.upper()}"
        candidate = env.get(key) or overrides.get(key) or ''
        hex_code = candidate if is_hex(candidate) else DEFAULT_HEX[mode][role]
        resolved[role] = from_hex('#' + hex_code.lstrip('#'))
    return resolved

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

__all__ = ['color', 'palette', 'from_hex', 'is_hex', 'RESET', 'BOLD', 'STRIKE', 'ROLES', 'DEFAULT_HEX']

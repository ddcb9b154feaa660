"""Settings loaded from environment variables (+ optional project .env).

Real environment variables win over .env entries. All names carry the
TODO_ prefix.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

ENV_PREFIX = "TODO"
PROJECT_ROOT = Path(__file__).resolve().parent.parent
ENV_FILE = PROJECT_ROOT / '.env'


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def read_env_file(path: Path = ENV_FILE) -> Dict[str, str]:
    """Parse KEY=VALUE lines; blank lines and # comments are skipped."""
    values: Dict[str, str] = {}
    if not path.exists():
        return values
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        values[k.strip()] = v.strip().strip('"').strip("'")
    return values


def truthy(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_dir: Path
    log_level: str
    alt_screen: bool
    toast_seconds: float


def load_settings(env: Optional[Mapping[str, str]] = None, env_file: Path = ENV_FILE) -> Settings:
    merged: Dict[str, str] = dict(read_env_file(env_file))
    merged.update(os.environ if env is None else env)

    def get(name: str) -> Optional[str]:
        raw = merged.get(_k(name))
        return raw if raw is not None and raw.strip() != '' else None

    toast_raw = get('TOAST_SECONDS')
    try:
        toast_seconds = float(toast_raw) if toast_raw is not None else 2.0
    except ValueError:
        toast_seconds = 2.0

    data_dir = get('DATA_DIR')
    log_dir = get('LOG_DIR')
    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else PROJECT_ROOT / 'data',
        log_dir=Path(log_dir).expanduser() if log_dir else PROJECT_ROOT / '.local' / 'log',
        log_level=(get('LOG_LEVEL') or 'INFO').upper(),
        alt_screen=truthy(get('ALT_SCREEN'), True),
        toast_seconds=toast_seconds,
    )

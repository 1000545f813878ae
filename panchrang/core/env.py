"""Configuration for panchrang, read from the environment and .env files.

Resolution order for each variable (first wins):
  1. Existing OS environment variables, never overwritten.
  2. The .env file passed as env_file (if given).
  3. The first .env found walking up from cwd, stopping at .git (file or dir).

Recognised variables:
  PANCHRANG_VOTING_AGE   minimum voter age (default 18)
  LOG_LEVEL              level for the 'panchrang' logger (default WARNING)
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_VOTING_AGE = 18
DEFAULT_LOG_LEVEL = 'WARNING'


@dataclass(frozen=True)
class Settings:
    voting_age: int = DEFAULT_VOTING_AGE
    log_level: str = DEFAULT_LOG_LEVEL
    env_path: Path | None = None


def _find_dotenv(start: Path) -> Path | None:
    """Return the nearest .env at or above start, without crossing a .git boundary."""
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / '.env'
        if candidate.is_file():
            return candidate
        if (directory / '.git').exists():
            return None
    return None


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse KEY=value lines. Quotes around values are stripped, comments skipped."""
    values: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, value = line.partition('=')
        key = key.strip()
        if key:
            values[key] = value.strip().strip('"').strip("'")
    return values


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env values into os.environ for keys not already set.

    Returns the file that was loaded, or None.
    """
    if env_file:
        path: Path | None = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def _int_env(key: str, default: int) -> int:
    raw = os.environ.get(key, '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings(env_file: str | None = None) -> Settings:
    """Load .env (if any) and build Settings. Cached; call get_settings.cache_clear() to reload."""
    env_path = load_env(env_file)
    return Settings(
        voting_age=_int_env('PANCHRANG_VOTING_AGE', DEFAULT_VOTING_AGE),
        log_level=os.environ.get('LOG_LEVEL', DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL,
        env_path=env_path,
    )

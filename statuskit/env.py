import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_env() -> None:
    """Load .env from the working directory if present."""
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    log_to_file: bool = False
    aliases_file: Optional[Path] = None


def get_settings() -> Settings:
    """
    Read settings from the environment.

    Raises:
        ValueError: If STATUSKIT_LOG_LEVEL is not a standard logging level
    """
    log_level = (os.getenv("STATUSKIT_LOG_LEVEL") or "").strip().upper() or "INFO"
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Invalid STATUSKIT_LOG_LEVEL {log_level!r} (use one of {list(LOG_LEVELS)})")
    aliases_file = os.getenv("STATUSKIT_ALIASES_FILE")
    return Settings(
        log_level=log_level,
        log_dir=Path(os.getenv("STATUSKIT_LOG_DIR", "logs")),
        log_to_file=_env_flag("STATUSKIT_LOG_FILE", False),
        aliases_file=Path(aliases_file) if aliases_file else None,
    )


def load_alias_file(path: Path) -> Dict[str, str]:
    """
    Read extra aliases from a JSON object of {alias: canonical status}.

    Raises:
        ValueError: If the file is missing, not JSON, or not a flat string mapping
    """
    if not path.exists():
        raise ValueError(f"Alias file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, IOError) as e:
        raise ValueError(f"Alias file unreadable ({path}): {e}") from e
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ValueError(f"Alias file must contain a JSON object of strings: {path}")
    return data

"""Project-level configuration and path helpers."""

import os
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "carebot.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"
DEFAULT_TREE_PATH = DATA_DIR / "conversation-tree.json"

DEFAULT_QONTAK_BASE_URL = "https://service-chat.qontak.com/api/open/v1"
DEFAULT_LLM_MODEL = "claude-3-5-sonnet-20241022"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def resolve_tree_path(env_value: PathLike | None = None) -> Path:
    """Resolve CONVERSATION_TREE_PATH to an absolute path."""
    if not env_value:
        return DEFAULT_TREE_PATH

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def env_float(name: str, default: float) -> float:
    """Read a numeric setting from the environment."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None

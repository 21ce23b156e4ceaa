"""
Saved draft of the `add` command, so a failed submission can be resumed.
"""

import json
from pathlib import Path
from typing import Any, Dict

from .config import get_config_dir
from .logger import get_logger

DRAFT_FILE_NAME = "draft.json"
DRAFT_KEYS = ("workspace", "projects", "name", "description", "assignee", "due", "fields")

log = get_logger(__name__)


def _draft_path() -> Path:
    return get_config_dir() / DRAFT_FILE_NAME


def load_draft() -> Dict[str, Any]:
    """Return the saved draft, or an empty dict when there is none."""
    path = _draft_path()
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError:
        log.warning("Ignoring unreadable draft at %s", path)
        return {}
    if not isinstance(data, dict):
        return {}
    return {k: v for k, v in data.items() if k in DRAFT_KEYS}


def save_draft(values: Dict[str, Any]) -> None:
    """Persist the non-empty draft values, replacing any previous draft."""
    draft = {k: v for k, v in values.items() if k in DRAFT_KEYS and v not in (None, "", [])}
    path = _draft_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(draft, f, indent=4)


def clear_draft() -> None:
    path = _draft_path()
    if path.exists():
        path.unlink()

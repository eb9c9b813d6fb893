# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "TaskDependencyPlanner"
COMPANY_NAME = "TaskPlanner"


def user_data_dir() -> Path:
    """
    Returns a per-user data directory, e.g.:

    Windows:
        C:\\Users\\<User>\\AppData\\Roaming\\TaskPlanner\\TaskDependencyPlanner

    macOS:
        ~/Library/Application Support/TaskPlanner/TaskDependencyPlanner

    Linux:
        ~/.local/share/TaskPlanner/TaskDependencyPlanner
    """
    try:
        if sys.platform.startswith("win"):
            base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
        elif sys.platform == "darwin":
            base = Path.home() / "Library" / "Application Support"
        else:
            base = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))

        path = base / COMPANY_NAME / APP_NAME
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        # Last-resort fallback: use home directory
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_db_path() -> Path:
    """
    SQLite database file: ``TDP_DB_PATH`` if set, else under the user data dir.
    """
    override = (os.getenv("TDP_DB_PATH") or "").strip()
    if override:
        return Path(override).expanduser()
    return user_data_dir() / "task_planner.db"

# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "GanttPlanner"
COMPANY_NAME = "GanttPlanner"


def user_data_dir() -> Path:
    """
    Per-user data directory:

    Windows:
        %APPDATA%\\GanttPlanner\\GanttPlanner

    macOS:
        ~/Library/Application Support/GanttPlanner/GanttPlanner

    Linux:
        $XDG_DATA_HOME/GanttPlanner/GanttPlanner (~/.local/share by default)

    PM_GANTT_DATA_DIR overrides all of the above.
    """
    override = os.getenv("PM_GANTT_DATA_DIR", "").strip()
    try:
        if override:
            path = Path(override)
        else:
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
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_db_path() -> Path:
    return user_data_dir() / "gantt_planner.db"

# infra/logging_config.py
from __future__ import annotations
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from infra.path import user_data_dir


def setup_logging(log_dir: Optional[Path] = None, level: Optional[str] = None) -> Path:
    """
    Configure root logging: rotating file under the user data dir plus console.
    PM_GANTT_LOG_LEVEL picks the level (INFO by default).
    """
    log_dir = log_dir or (user_data_dir() / "logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "gantt.log"

    level_name = (level or os.getenv("PM_GANTT_LOG_LEVEL", "INFO")).strip().upper()
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    # repeated setup (tests, re-launch) must not stack handlers
    logger.handlers.clear()

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s"))
    logger.addHandler(file_handler)

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    logger.info("Logging initialized. Log file at %s", log_file)
    return log_file

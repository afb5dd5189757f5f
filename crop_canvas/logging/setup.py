"""
Logging setup: console plus a rotating log file.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_FILENAME = "crop_canvas.log"


def setup_logging(
    log_dir: Path | None = None,
    level: str = "INFO",
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 3,
) -> Path:
    """Configure console + rotating file handlers and return the log file path."""
    log_dir = log_dir or Path(".") / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILENAME
    handlers: list[logging.Handler] = [
        RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"),
        logging.StreamHandler(),
    ]
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    # PIL logs every decoded chunk at DEBUG
    logging.getLogger("PIL").setLevel(max(logging.INFO, logging.getLogger().level))
    return log_path

# ivisit/utils/logger.py
"""
Logging for the dashboard: every module calls get_logger(__name__).
Records go to stderr and to LOG_DIR/LOG_FILE, rotated by size.
Messages are tagged by area, e.g. [LOGBOOK], [STATIONS], [GUARDS], [BACKEND].
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from ivisit.config import settings

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_ready = False


def _log_path() -> str:
    log_dir = settings.LOG_DIR or os.path.join(_PROJECT_ROOT, "logs")
    os.makedirs(log_dir, exist_ok=True)
    return os.path.join(log_dir, settings.LOG_FILE)


def _setup():
    global _ready
    if _ready:
        return
    _ready = True

    level = settings.LOG_LEVEL.upper()
    formatter = logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers = [
        logging.StreamHandler(),
        RotatingFileHandler(_log_path(), maxBytes=settings.LOG_FILE_MAX_BYTES,
                            backupCount=settings.LOG_FILE_BACKUPS, encoding="utf-8"),
    ]
    root = logging.getLogger()
    root.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # BackendClient already logs each request under [BACKEND]
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    _setup()
    return logging.getLogger(name)

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from tasklist.config import SETTINGS, PROJECT_ROOT

# Libraries whose INFO output drowns the task log.
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "alembic")


def setup_logging() -> None:
    log_dir = PROJECT_ROOT / SETTINGS.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "tasklist.log"

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(
        log_file, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    level = SETTINGS.log_level.upper()
    logging.basicConfig(level=level, handlers=[file_handler, console_handler])

    # Keep library chatter at WARNING unless the app itself runs in DEBUG.
    library_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
    logging.getLogger("tasklist").setLevel(level)

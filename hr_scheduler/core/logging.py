"""Logging configuration."""

import logging
import sys
from pathlib import Path
from typing import Optional

from hr_scheduler.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_file: Optional[Path] = None) -> None:
    """
    Send application logs to stdout and to ``logs/hr_scheduler.log``.

    Safe to call more than once (e.g. one app lifespan per test client):
    handlers installed by a previous call are replaced, not duplicated.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    log_file = log_file or Path("logs") / "hr_scheduler.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    file_handler = logging.FileHandler(log_file)
    for handler in (console_handler, file_handler):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler.set_name("hr_scheduler")

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in list(root_logger.handlers):
        if handler.get_name() == "hr_scheduler":
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    # SQL echo only while developing
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.ENVIRONMENT == "development" and settings.DB_ECHO
        else logging.WARNING
    )

"""Logging for the budget ledger.

Everything logs through the "ledger" logger or its children (e.g.
"ledger.ingestion"). setup_logging() sends records to a per-day file under
config.log_dir and short messages to the console.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from config import Config

LOGGER_NAME = "ledger"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s - %(message)s"


def log_file_path(config: Config, day: date) -> Path:
    """Path of the log file for a given day, e.g. logs/budget-ledger-2024-12-20.log."""
    return config.log_dir / f"budget-ledger-{day.isoformat()}.log"


def setup_logging(config: Config, today: Optional[date] = None) -> None:
    """Attach file and console handlers to the ledger logger.

    Calling it again replaces the handlers instead of adding more.

    Args:
        config: Application configuration with log_level and log_dir.
        today: Date used to name the log file (defaults to date.today()).
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = get_logger()
    logger.setLevel(config.log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(
        log_file_path(config, today or date.today()), encoding="utf-8"
    )
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    for handler in (file_handler, console_handler):
        handler.setLevel(config.log_level)
        logger.addHandler(handler)


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)

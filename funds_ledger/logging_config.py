"""
Logging configuration for the ledger.

Modules log through logging.getLogger(__name__); this module
only decides where those records go and at what level.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5

LEDGER_LOGGER = "funds_ledger"


def setup_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    echo_sql: bool = False,
) -> logging.Logger:
    """
    Configure the package logger.

    Records always go to the console. When log_file is given,
    they are also written to a rotating file.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    logger = logging.getLogger(LEDGER_LOGGER)
    logger.setLevel(numeric_level)
    # Avoid duplicate handlers if setup_logging is called multiple times
    logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Keep SQLAlchemy quiet unless SQL echo was asked for
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if echo_sql else logging.WARNING
    )
    return logger

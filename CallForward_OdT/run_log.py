from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = 'CallForward_OdT.run'
LOG_FORMAT = '%(asctime)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_run_logger(log_path: Path, name: str = LOGGER_NAME) -> logging.Logger:
    """Attach an append-only file handler for this run's scriptlog file."""
    logger = logging.getLogger(name)
    close_run_logger(logger)
    handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def close_run_logger(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

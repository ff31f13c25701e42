from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import os

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO", log_file: str = "") -> logging.Logger:
    logger = logging.getLogger("deskpro_integration")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT)

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    if log_file and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=5,
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger

# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Logging setup shared by the checks and the file sink."""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Tuple

LOG_FORMAT = "[%(asctime)s] - [%(levelname)s] - [%(name)s] - %(message)s"


def init_logger(
    logger_name: str,
    log_dir: str,
    log_name: str,
    log_formatter: Optional[logging.Formatter] = logging.Formatter(LOG_FORMAT),
    log_level: int = logging.INFO,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 2,
) -> Tuple[logging.Logger, logging.Handler]:
    """Send the records of `logger_name` to the rotating file
    `{log_dir}/{log_name}`, creating `log_dir` if needed.

    A rotating file handler left on the logger by an earlier call is closed and
    replaced, so running several checks in one process logs every record once.
    """
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(log_dir, log_name),
        mode="a",
        maxBytes=max_bytes,
        backupCount=backup_count,
    )
    if log_formatter is not None:
        handler.setFormatter(log_formatter)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    for previous in [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]:
        logger.removeHandler(previous)
        previous.close()
    logger.addHandler(handler)
    return logger, handler
